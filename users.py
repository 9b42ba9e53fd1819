from fastapi import APIRouter, Depends

from auth import get_current_user
from crud import UserStore
from dependencies import get_user_store
from schemas import UserResponse, UserUpdate

users_router = APIRouter(prefix="/users", dependencies=[Depends(get_current_user)])


@users_router.get("", response_model=list[UserResponse])
async def get_users(users: UserStore = Depends(get_user_store)):
    return users.list_all()


@users_router.get("/{user_id}", response_model=UserResponse)
async def get_user(user_id: str, users: UserStore = Depends(get_user_store)):
    return users.get_user(user_id)


@users_router.put("/{user_id}", response_model=UserResponse)
async def update_user(
    user_id: str,
    update: UserUpdate,
    users: UserStore = Depends(get_user_store),
):
    return users.update_user(user_id, update.model_dump(exclude_none=True))


@users_router.delete("/{user_id}")
async def delete_user(user_id: str, users: UserStore = Depends(get_user_store)):
    users.delete_user(user_id)
    return {"message": "User deleted successfully"}
