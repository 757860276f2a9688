from datetime import datetime
from typing import List, Optional
from fastapi import APIRouter, Depends
from pydantic import BaseModel, ConfigDict, Field
from sqlalchemy.orm import Session
from devconnector.core.database import get_db
from devconnector.api.dependencies import get_current_user_id
from devconnector.services.post_service import post_service

router = APIRouter(prefix="/posts", tags=["posts"])


class TextRequest(BaseModel):
    text: Optional[str] = None


class LikeResponse(BaseModel):
    id: int
    user: int = Field(validation_alias="user_id")

    model_config = ConfigDict(from_attributes=True)


class CommentResponse(BaseModel):
    id: int
    user: int = Field(validation_alias="user_id")
    text: str
    name: Optional[str] = None
    avatar: Optional[str] = None
    date: Optional[datetime] = Field(default=None, validation_alias="created_at")

    model_config = ConfigDict(from_attributes=True)


class PostResponse(BaseModel):
    id: int
    user: int = Field(validation_alias="user_id")
    text: str
    name: Optional[str] = None
    avatar: Optional[str] = None
    date: Optional[datetime] = Field(default=None, validation_alias="created_at")
    likes: List[LikeResponse] = []
    comments: List[CommentResponse] = []

    model_config = ConfigDict(from_attributes=True)


class MessageResponse(BaseModel):
    msg: str


@router.post("", response_model=PostResponse)
def create_post(
    post: TextRequest,
    user_id: int = Depends(get_current_user_id),
    db: Session = Depends(get_db),
):
    """Create a post authored by the current user"""
    return post_service.create_post(db, user_id, post.model_dump())


@router.get("", response_model=List[PostResponse])
def list_posts(
    user_id: int = Depends(get_current_user_id),
    db: Session = Depends(get_db),
):
    """All posts, newest first"""
    return post_service.list_posts(db)


@router.get("/{post_id}", response_model=PostResponse)
def get_post(
    post_id: str,
    user_id: int = Depends(get_current_user_id),
    db: Session = Depends(get_db),
):
    return post_service.get_post(db, post_id)


@router.delete("/{post_id}", response_model=MessageResponse)
def delete_post(
    post_id: str,
    user_id: int = Depends(get_current_user_id),
    db: Session = Depends(get_db),
):
    """Delete a post - only its author may do this"""
    post_service.delete_post(db, user_id, post_id)
    return {"msg": "Post removed"}


@router.put("/like/{post_id}", response_model=List[LikeResponse])
def like_post(
    post_id: str,
    user_id: int = Depends(get_current_user_id),
    db: Session = Depends(get_db),
):
    return post_service.like_post(db, user_id, post_id)


@router.put("/unlike/{post_id}")
def unlike_post(
    post_id: str,
    user_id: int = Depends(get_current_user_id),
    db: Session = Depends(get_db),
):
    """Remove the current user's like; a no-op message if there was none"""
    likes = post_service.unlike_post(db, user_id, post_id)
    if likes is None:
        return {"msg": "Post has not yet been liked"}
    return [LikeResponse.model_validate(like) for like in likes]


@router.post("/comment/{post_id}", response_model=List[CommentResponse])
def add_comment(
    post_id: str,
    comment: TextRequest,
    user_id: int = Depends(get_current_user_id),
    db: Session = Depends(get_db),
):
    return post_service.add_comment(db, user_id, post_id, comment.model_dump())


@router.delete("/comment/{post_id}/{comment_id}", response_model=List[CommentResponse])
def delete_comment(
    post_id: str,
    comment_id: str,
    user_id: int = Depends(get_current_user_id),
    db: Session = Depends(get_db),
):
    """Delete a comment - only its author may do this"""
    return post_service.delete_comment(db, user_id, post_id, comment_id)
