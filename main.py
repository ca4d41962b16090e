import uvicorn

from blog_api.config import settings

if __name__ == "__main__":
    print(f"🚀 Starting {settings.APP_NAME}...")
    print(f"📍 Server: http://localhost:{settings.SERVICE_PORT}")
    print(f"📚 API Docs: http://localhost:{settings.SERVICE_PORT}/docs")
    print("🛑 Press CTRL+C to stop\n")

    uvicorn.run(
        "blog_api.app:app",
        host=settings.SERVICE_HOST,
        port=settings.SERVICE_PORT,
        reload=settings.is_development,
        log_level=settings.LOG_LEVEL.lower(),
    )
