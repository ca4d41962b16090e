from blog_api.config.settings import Settings


def test_environment_defaults_to_production(monkeypatch):
    monkeypatch.delenv("ENVIRONMENT", raising=False)

    current = Settings(_env_file=None)

    assert current.ENVIRONMENT == "production"
    assert current.is_development is False


def test_development_is_opt_in(monkeypatch):
    monkeypatch.setenv("ENVIRONMENT", "development")

    assert Settings(_env_file=None).is_development is True


def test_derived_values():
    current = Settings(_env_file=None, DB_USER="blog", DB_PASSWORD="pw", DB_HOST="db", DB_PORT=5433, DB_NAME="posts")

    assert current.DATABASE_URL == "postgresql://blog:pw@db:5433/posts"
    assert Settings(_env_file=None, CORS_ORIGINS="http://a, ,http://b").cors_origins == ["http://a", "http://b"]
