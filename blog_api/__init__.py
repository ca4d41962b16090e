"""Blog API: users, authentication and blog posts over PostgreSQL"""
