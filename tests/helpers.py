PASSWORD = "Passw0rd"


def register(client, username, email, password=PASSWORD, **extra):
    body = {"username": username, "email": email, "password": password, **extra}
    return client.post("/api/auth/register", json=body)


def login(client, email, password=PASSWORD):
    return client.post("/api/auth/login", json={"email": email, "password": password})


def auth_header(token):
    return {"Authorization": f"Bearer {token}"}


def create_post(client, headers, title="Hello world", content="Some content", **extra):
    body = {"title": title, "content": content, **extra}
    return client.post("/api/posts", json=body, headers=headers)
