import logging

from fastapi import APIRouter, Depends, Response, status
from fastapi.security import OAuth2PasswordBearer

from config import Settings, get_settings
from crud import UserStore
from dependencies import get_user_store
from errors import Unauthenticated, InvalidToken
from schemas import CurrentUser, Token, UserCreate, UserLogin
from security import create_access_token, decode_access_token

logger = logging.getLogger(__name__)

auth_router = APIRouter()
oauth2_scheme = OAuth2PasswordBearer(tokenUrl="auth/login", auto_error=False)


async def get_current_user(
    token: str = Depends(oauth2_scheme),
    settings: Settings = Depends(get_settings),
) -> CurrentUser:
    if not token:
        raise Unauthenticated()

    payload = decode_access_token(token, settings.jwt_secret, settings.jwt_algorithm)
    user_id = payload.get("sub")
    if not isinstance(user_id, str) or not user_id:
        raise InvalidToken()
    return CurrentUser(id=user_id, email=payload.get("email"))


@auth_router.post("/register", status_code=status.HTTP_201_CREATED)
async def register(user: UserCreate, users: UserStore = Depends(get_user_store)):
    users.create_user(user.name, user.email, user.password)
    logger.info("Registered user %s", user.email)
    return Response(status_code=status.HTTP_201_CREATED)


@auth_router.post(
    "/login", response_model=Token, status_code=status.HTTP_201_CREATED
)
async def login(
    credentials: UserLogin,
    users: UserStore = Depends(get_user_store),
    settings: Settings = Depends(get_settings),
):
    db_user = users.authenticate(credentials.email, credentials.password)
    if db_user is None:
        logger.info("Failed login for %s", credentials.email)
        raise Unauthenticated("Invalid credentials")

    access_token = create_access_token(
        data={"sub": db_user.id, "email": db_user.email},
        secret=settings.jwt_secret,
        expires_in=settings.jwt_expiration,
        algorithm=settings.jwt_algorithm,
    )
    return Token(access_token=access_token)
