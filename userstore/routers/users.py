from typing import List

from fastapi import APIRouter, Depends, HTTPException, Response, status
from sqlalchemy.orm import Session

from userstore.core.errors import ConstraintViolation
from userstore.db.session import get_db
from userstore.repositories.users import UserRepository
from userstore.schemas.user import UserCreate, UserOut


router = APIRouter()


def get_repository(db: Session = Depends(get_db)) -> UserRepository:
    return UserRepository(db)


@router.post("/users", response_model=UserOut, status_code=status.HTTP_201_CREATED)
def create_user(payload: UserCreate, repo: UserRepository = Depends(get_repository)) -> UserOut:
    try:
        return repo.create(payload.email)
    except ConstraintViolation:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail="Email already registered")


@router.get("/users", response_model=List[UserOut])
def list_users(repo: UserRepository = Depends(get_repository)) -> List[UserOut]:
    return repo.read_all()


@router.get("/users/{user_id}", response_model=UserOut)
def get_user(user_id: int, repo: UserRepository = Depends(get_repository)) -> UserOut:
    user = repo.get(user_id)
    if user is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="User not found")
    return user


@router.post("/users/{user_id}/touch", status_code=status.HTTP_204_NO_CONTENT)
def touch_user(user_id: int, repo: UserRepository = Depends(get_repository)) -> Response:
    repo.update_timestamp(user_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.delete("/users/{user_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_user(user_id: int, repo: UserRepository = Depends(get_repository)) -> Response:
    repo.delete_by_id(user_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
