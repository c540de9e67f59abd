from typing import List

from fastapi import APIRouter, Depends, HTTPException, status

from nulltask.api.v1.deps import get_user_service
from nulltask.core.exceptions import StorageFault
from nulltask.schemas.user_schema import MessageOut, UserCreate, UserOut, UserUpdate
from nulltask.services.user_service import UserService

router = APIRouter(prefix="/users", tags=["users"])


def _storage_error(detail: str) -> HTTPException:
    return HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=detail)


@router.post("/create", response_model=UserOut, status_code=status.HTTP_201_CREATED)
async def create_user(user_in: UserCreate, user_svc: UserService = Depends(get_user_service)):
    try:
        return await user_svc.register_user(user_in)
    except StorageFault:
        raise _storage_error("Failed to create user.")


@router.get("/get/email/{email}", response_model=UserOut)
async def get_user_by_email(email: str, user_svc: UserService = Depends(get_user_service)):
    try:
        return await user_svc.get_by_email(email)
    except StorageFault:
        raise _storage_error("Failed to fetch user.")


@router.get("/get/id/{user_id}", response_model=UserOut)
async def get_user_by_id(user_id: str, user_svc: UserService = Depends(get_user_service)):
    try:
        return await user_svc.get_by_id(user_id)
    except StorageFault:
        raise _storage_error("Failed to fetch user.")


@router.get("/get/all/", response_model=List[UserOut])
async def list_users(user_svc: UserService = Depends(get_user_service)):
    try:
        return await user_svc.list_users()
    except StorageFault:
        raise _storage_error("Failed to fetch users.")


@router.put("/update/email/{email}", response_model=UserOut)
async def update_user_by_email(
        email: str,
        changes: UserUpdate,
        user_svc: UserService = Depends(get_user_service),
):
    try:
        return await user_svc.update_by_email(email, changes)
    except StorageFault:
        raise _storage_error("Failed to update user.")


@router.put("/update/id/{user_id}", response_model=UserOut)
async def update_user_by_id(
        user_id: str,
        changes: UserUpdate,
        user_svc: UserService = Depends(get_user_service),
):
    try:
        return await user_svc.update_by_id(user_id, changes)
    except StorageFault:
        raise _storage_error("Failed to update user.")


@router.delete("/delete/email/{email}", response_model=MessageOut)
async def delete_user_by_email(email: str, user_svc: UserService = Depends(get_user_service)):
    try:
        await user_svc.delete_by_email(email)
    except StorageFault:
        raise _storage_error("Failed to delete user.")
    return MessageOut(message="User deleted.")


@router.delete("/delete/id/{user_id}", response_model=MessageOut)
async def delete_user_by_id(user_id: str, user_svc: UserService = Depends(get_user_service)):
    try:
        await user_svc.delete_by_id(user_id)
    except StorageFault:
        raise _storage_error("Failed to delete user.")
    return MessageOut(message="User deleted.")
