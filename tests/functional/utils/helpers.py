import uuid
from datetime import datetime, timedelta, timezone

from jose import jwt

from tests.functional.settings import test_settings

# id заданы явно, чтобы проверять тай-брейк по id
ALPHA_ID = uuid.UUID("00000000-0000-0000-0000-000000000001")
BETA_ID = uuid.UUID("00000000-0000-0000-0000-000000000002")
GAMMA_ID = uuid.UUID("00000000-0000-0000-0000-000000000003")


def _make_token(user_id: uuid.UUID, *, ttl_min: int = 15, secret: str | None = None) -> str:
    now = datetime.now(timezone.utc)
    payload = {
        "sub": str(user_id),
        "roles": ["user"],
        "iss": test_settings.jwt_iss,
        "aud": test_settings.jwt_aud,
        "iat": int(now.timestamp()),
        "exp": int((now + timedelta(minutes=ttl_min)).timestamp()),
        "jti": str(uuid.uuid4()),
    }
    return jwt.encode(payload, secret or test_settings.jwt_secret, algorithm="HS256")

def _auth_headers(access: str) -> dict:
    return {"Authorization": f"Bearer {access}"}

async def _create_movie(client, title: str, year: int, genres: list[str] | None = None, synopsis: str | None = None):
    resp = await client.post(
        "/api/v1/movies",
        json={"title": title, "year_of_release": year, "genres": genres or [], "synopsis": synopsis},
    )
    assert resp.status_code == 201, resp.text
    return resp.json()
