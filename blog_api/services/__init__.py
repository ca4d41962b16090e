"""Domain services: authorization and slugs"""
