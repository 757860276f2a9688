import logging
from typing import Any, Dict, List, Optional
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session
from devconnector.core.errors import AlreadyLiked, Forbidden, NotFound
from devconnector.models.post import Comment, Like, Post
from devconnector.models.user import User
from devconnector.services.credential_store import CredentialStore
from devconnector.services.persistence import parse_id, persistence_errors
from devconnector.services.validation import TEXT_RULES, validate

logger = logging.getLogger(__name__)

POST_NOT_FOUND_MESSAGE = "Post Not Found"
COMMENT_NOT_FOUND_MESSAGE = "Comment does not exist"


class PostService:
    """
    Posts, likes and comments.

    Mutations of likes and comments are read-modify-write on the loaded
    Post. Concurrent likes by the same user are still stopped by the
    unique (post_id, user_id) index.
    """

    @staticmethod
    def _get_author(db: Session, user_id: int) -> User:
        user = CredentialStore(db).find_by_id(user_id)
        if user is None:
            raise NotFound("User not found")
        return user

    @staticmethod
    def create_post(db: Session, user_id: int, data: Dict[str, Any]) -> Post:
        validate(data, TEXT_RULES)
        author = PostService._get_author(db, user_id)

        post = Post(
            user_id=author.id,
            text=data["text"],
            # Author snapshot, kept even if the profile changes later
            name=author.name,
            avatar=author.avatar,
        )
        with persistence_errors(db, "create post"):
            db.add(post)
            db.commit()
            db.refresh(post)
        return post

    @staticmethod
    def list_posts(db: Session) -> List[Post]:
        """All posts, most recent first"""
        with persistence_errors(db, "list posts"):
            return db.query(Post).order_by(Post.created_at.desc(), Post.id.desc()).all()

    @staticmethod
    def get_post(db: Session, post_id: str | int) -> Post:
        parsed_id = parse_id(post_id)
        if parsed_id is None:
            raise NotFound(POST_NOT_FOUND_MESSAGE)
        with persistence_errors(db, "load post"):
            post = db.get(Post, parsed_id)
        if post is None:
            raise NotFound(POST_NOT_FOUND_MESSAGE)
        return post

    @staticmethod
    def delete_post(db: Session, user_id: int, post_id: str | int) -> None:
        post = PostService.get_post(db, post_id)
        if post.user_id != user_id:
            logger.warning("User %s tried to delete post %s owned by %s", user_id, post.id, post.user_id)
            raise Forbidden()
        with persistence_errors(db, "delete post"):
            db.delete(post)
            db.commit()

    @staticmethod
    def like_post(db: Session, user_id: int, post_id: str | int) -> List[Like]:
        post = PostService.get_post(db, post_id)
        if any(like.user_id == user_id for like in post.likes):
            raise AlreadyLiked()

        with persistence_errors(db, "like post"):
            post.likes.insert(0, Like(user_id=user_id))
            try:
                db.commit()
            except IntegrityError:
                db.rollback()
                raise AlreadyLiked()
            db.refresh(post)
            return list(post.likes)

    @staticmethod
    def unlike_post(db: Session, user_id: int, post_id: str | int) -> Optional[List[Like]]:
        """Remove the user's like; returns None when there was nothing to remove"""
        post = PostService.get_post(db, post_id)
        if not any(like.user_id == user_id for like in post.likes):
            return None

        with persistence_errors(db, "unlike post"):
            post.likes = [like for like in post.likes if like.user_id != user_id]
            db.commit()
            db.refresh(post)
            return list(post.likes)

    @staticmethod
    def add_comment(db: Session, user_id: int, post_id: str | int, data: Dict[str, Any]) -> List[Comment]:
        validate(data, TEXT_RULES)
        author = PostService._get_author(db, user_id)
        post = PostService.get_post(db, post_id)

        comment = Comment(
            user_id=author.id,
            text=data["text"],
            name=author.name,
            avatar=author.avatar,
        )
        with persistence_errors(db, "add comment"):
            post.comments.insert(0, comment)
            db.commit()
            db.refresh(post)
            return list(post.comments)

    @staticmethod
    def delete_comment(db: Session, user_id: int, post_id: str | int, comment_id: str | int) -> List[Comment]:
        post = PostService.get_post(db, post_id)

        parsed_comment_id = parse_id(comment_id)
        comment = next((c for c in post.comments if c.id == parsed_comment_id), None)
        if comment is None:
            raise NotFound(COMMENT_NOT_FOUND_MESSAGE)

        if comment.user_id != user_id:
            logger.warning("User %s tried to delete comment %s owned by %s", user_id, comment.id, comment.user_id)
            raise Forbidden()

        with persistence_errors(db, "delete comment"):
            # delete-orphan cascade removes the row
            post.comments.remove(comment)
            db.commit()
            db.refresh(post)
            return list(post.comments)


post_service = PostService()
