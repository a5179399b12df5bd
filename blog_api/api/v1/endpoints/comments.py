"""Comment endpoints: listing, replies, likes and moderation."""

import logging
from typing import Dict, List

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from blog_api.api.deps import (
    PageParams,
    get_current_user,
    get_db,
    get_page_params,
    require_owner,
    require_role,
)
from blog_api.core.exceptions import NotFoundException
from blog_api.crud import ParentCommentNotFound, crud_comment, crud_comment_like, crud_post
from blog_api.models.comment import Comment
from blog_api.models.role import RoleName
from blog_api.models.user import User
from blog_api.schemas.comment import (
    CommentApproval,
    CommentApprovalData,
    CommentApprovalResponse,
    CommentCreate,
    CommentData,
    CommentLikeResponse,
    CommentListData,
    CommentResponse,
    CommentUpdate,
    ReplyListData,
    ReplyResponse,
)
from blog_api.schemas.common import APIResponse, AuthorSummary, build_pagination

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/comments",
    tags=["Comments"],
)


def _reply_response(reply: Comment, likes: int) -> ReplyResponse:
    return ReplyResponse(
        id=reply.id,
        text=reply.text,
        author=AuthorSummary.model_validate(reply.author),
        likes=likes,
        is_edited=reply.is_edited,
        created_at=reply.created_at,
        updated_at=reply.updated_at,
    )


def _comment_response(
    comment: Comment,
    likes: int,
    replies: List[ReplyResponse] = None,
) -> CommentResponse:
    replies = replies or []
    return CommentResponse(
        id=comment.id,
        text=comment.text,
        author=AuthorSummary.model_validate(comment.author),
        post=comment.post_id,
        parent_comment=comment.parent_comment_id,
        likes=likes,
        replies_count=len(replies),
        replies=replies,
        is_approved=comment.is_approved,
        is_edited=comment.is_edited,
        created_at=comment.created_at,
        updated_at=comment.updated_at,
    )


def _approved_replies(db: Session, comment_id: int) -> List[ReplyResponse]:
    replies = crud_comment.get_replies(db, comment_id=comment_id)
    likes: Dict[int, int] = crud_comment.count_likes_for(db, (r.id for r in replies))
    return [_reply_response(reply, likes[reply.id]) for reply in replies]


@router.get(
    "/post/{post_id}",
    response_model=APIResponse[CommentListData],
    status_code=status.HTTP_200_OK,
    summary="Get comments of a post",
    description="""
    Approved top-level comments, newest first, each with its approved direct
    replies oldest first.

    **Access:** Public
    """,
)
def list_post_comments(
    post_id: int,
    page_params: PageParams = Depends(get_page_params),
    db: Session = Depends(get_db),
) -> APIResponse[CommentListData]:
    post = crud_post.get(db, post_id)
    if not post:
        raise NotFoundException("Post")

    comments, total = crud_comment.list_top_level(
        db, post_id=post_id, page=page_params.page, limit=page_params.limit
    )
    likes = crud_comment.count_likes_for(db, (c.id for c in comments))

    return APIResponse(
        count=len(comments),
        pagination=build_pagination(page_params.page, page_params.limit, total),
        data=CommentListData(
            comments=[
                _comment_response(comment, likes[comment.id], _approved_replies(db, comment.id))
                for comment in comments
            ]
        ),
    )


@router.post(
    "",
    response_model=APIResponse[CommentData],
    status_code=status.HTTP_201_CREATED,
    summary="Add comment",
    description="""
    Comment on a post, or reply to a comment of the same post by passing
    `parent_comment`.

    **Access:** Authenticated users
    """,
)
def create_comment(
    comment_in: CommentCreate,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
) -> APIResponse[CommentData]:
    post = crud_post.get(db, comment_in.post)
    if not post:
        raise NotFoundException("Post")

    try:
        comment = crud_comment.create_comment(
            db,
            post=post,
            author_id=current_user.id,
            text=comment_in.text,
            parent_comment_id=comment_in.parent_comment,
        )
    except ParentCommentNotFound:
        raise NotFoundException("Parent comment")

    logger.info(
        f"Comment id={comment.id} on post id={post.id} by user id={current_user.id}"
        + (f" replying to id={comment.parent_comment_id}" if comment.parent_comment_id else "")
    )
    return APIResponse(
        message="Comment added successfully",
        data=CommentData(comment=_comment_response(comment, 0)),
    )


@router.put(
    "/{comment_id}",
    response_model=APIResponse[CommentData],
    status_code=status.HTTP_200_OK,
    summary="Update comment",
    description="""
    Replace the comment text and mark it as edited.

    **Access:** Comment author or admin
    """,
)
def update_comment(
    comment_id: int,
    comment_in: CommentUpdate,
    comment: Comment = Depends(require_owner(crud_comment, id_param="comment_id", label="Comment")),
    db: Session = Depends(get_db),
) -> APIResponse[CommentData]:
    comment = crud_comment.update_text(db, comment=comment, text=comment_in.text)
    return APIResponse(
        message="Comment updated successfully",
        data=CommentData(
            comment=_comment_response(
                comment,
                crud_comment.count_likes(db, comment_id=comment.id),
                _approved_replies(db, comment.id),
            )
        ),
    )


@router.delete(
    "/{comment_id}",
    response_model=APIResponse[None],
    status_code=status.HTTP_200_OK,
    summary="Delete comment",
    description="""
    Delete a comment. A reply is detached from its parent. Replies of the
    deleted comment are not deleted; they stay stored without a reachable
    parent.

    **Access:** Comment author or admin
    """,
)
def delete_comment(
    comment_id: int,
    comment: Comment = Depends(require_owner(crud_comment, id_param="comment_id", label="Comment")),
    db: Session = Depends(get_db),
) -> APIResponse[None]:
    crud_comment.delete_comment(db, comment=comment)
    return APIResponse(message="Comment deleted successfully")


@router.post(
    "/{comment_id}/like",
    response_model=APIResponse[CommentLikeResponse],
    status_code=status.HTTP_200_OK,
    summary="Toggle like on comment",
    description="""
    Like or unlike a comment. If already liked, it will unlike. If not liked, it will like.

    **Access:** Authenticated users
    """,
)
def toggle_like_comment(
    comment_id: int,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
) -> APIResponse[CommentLikeResponse]:
    comment = crud_comment.get(db, comment_id)
    if not comment:
        raise NotFoundException("Comment")

    is_liked, like_count = crud_comment_like.toggle_like(db, comment=comment, user_id=current_user.id)
    return APIResponse(
        message=f"Comment {'liked' if is_liked else 'unliked'} successfully",
        data=CommentLikeResponse(likes=like_count, is_liked=is_liked),
    )


@router.patch(
    "/{comment_id}/approve",
    response_model=APIResponse[CommentApprovalData],
    status_code=status.HTTP_200_OK,
    summary="Approve or disapprove comment",
    description="""
    Unapproved comments, and the replies under them, are hidden from public reads.

    **Access:** Admin only
    """,
)
def approve_comment(
    comment_id: int,
    approval_in: CommentApproval,
    current_user: User = Depends(require_role(RoleName.ADMIN.value)),
    db: Session = Depends(get_db),
) -> APIResponse[CommentApprovalData]:
    comment = crud_comment.get(db, comment_id)
    if not comment:
        raise NotFoundException("Comment")

    comment = crud_comment.set_approval(db, comment=comment, is_approved=approval_in.is_approved)
    state = "approved" if comment.is_approved else "disapproved"
    logger.info(f"Comment id={comment.id} {state} by admin id={current_user.id}")
    return APIResponse(
        message=f"Comment {state} successfully",
        data=CommentApprovalData(
            comment=CommentApprovalResponse(id=comment.id, is_approved=comment.is_approved)
        ),
    )


@router.get(
    "/{comment_id}/replies",
    response_model=APIResponse[ReplyListData],
    status_code=status.HTTP_200_OK,
    summary="Get replies of a comment",
    description="""
    Approved direct replies, oldest first.

    **Access:** Public
    """,
)
def get_comment_replies(
    comment_id: int,
    db: Session = Depends(get_db),
) -> APIResponse[ReplyListData]:
    comment = crud_comment.get(db, comment_id)
    if not comment or not comment.is_approved:
        raise NotFoundException("Comment")

    replies = _approved_replies(db, comment.id)
    return APIResponse(count=len(replies), data=ReplyListData(replies=replies))


__all__ = ["router"]
