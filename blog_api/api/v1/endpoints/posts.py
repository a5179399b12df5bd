"""Blog post endpoints."""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from blog_api.api.deps import (
    PageParams,
    get_current_user,
    get_db,
    get_optional_current_user,
    get_page_params,
    require_owner,
)
from blog_api.core.exceptions import BadRequestException, NotFoundException
from blog_api.crud import PostQuery, crud_category, crud_post
from blog_api.models.post import Post, PostStatus
from blog_api.models.user import User
from blog_api.schemas.common import (
    APIResponse,
    AuthorDetail,
    AuthorSummary,
    CategorySummary,
    build_pagination,
)
from blog_api.schemas.post import (
    CategoryInfo,
    PostCategoryListData,
    PostCommentPreview,
    PostCreate,
    PostData,
    PostDetailData,
    PostDetailResponse,
    PostListData,
    PostResponse,
    PostUpdate,
    TrendingPostListData,
    TrendingPostResponse,
)

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/posts",
    tags=["Posts"],
)

# Number of comments embedded in each post of a listing
LIST_COMMENT_PREVIEW = 3


def _enrich_post_response(
    db: Session,
    post: Post,
    comment_limit: Optional[int] = None,
    detail: bool = False,
) -> PostResponse:
    """Shape a post with author, category and its approved comments.

    `detail` adds the author bio for the single-post view.
    """
    comments = crud_post.get_approved_comments(db, post_id=post.id, limit=comment_limit)
    if comment_limit is None:
        comments_count = len(comments)
    else:
        comments_count = crud_post.count_approved_comments(db, post_id=post.id)

    response_cls, author_cls = (PostDetailResponse, AuthorDetail) if detail else (PostResponse, AuthorSummary)
    return response_cls(
        id=post.id,
        title=post.title,
        content=post.content,
        excerpt=post.excerpt,
        author=author_cls.model_validate(post.author),
        category=CategorySummary.model_validate(post.category),
        tags=post.tags or [],
        featured_image=post.featured_image,
        status=post.status,
        view_count=post.view_count,
        is_featured=bool(post.is_featured),
        comments_count=comments_count,
        comments=[
            PostCommentPreview(
                id=comment.id,
                text=comment.text,
                author=AuthorSummary.model_validate(comment.author),
                parent_comment_id=comment.parent_comment_id,
                created_at=comment.created_at,
            )
            for comment in comments
        ],
        created_at=post.created_at,
        updated_at=post.updated_at,
    )


def _resolve_category_or_400(db: Session, ref: str):
    category = crud_category.resolve(db, ref)
    if not category:
        raise BadRequestException(detail="Category not found")
    return category


@router.get(
    "",
    response_model=APIResponse[PostListData],
    status_code=status.HTTP_200_OK,
    summary="List published posts",
    description="""
    List published posts, newest first.

    **Filters:**
    - `category`: category id or exact name (case-insensitive)
    - `search`: case-insensitive text found in the title or the content

    **Access:** Public
    """,
)
def list_posts(
    category: Optional[str] = Query(None, description="Category id or name"),
    search: Optional[str] = Query(None, description="Text to find in title or content"),
    page_params: PageParams = Depends(get_page_params),
    db: Session = Depends(get_db),
) -> APIResponse[PostListData]:
    query = PostQuery(page=page_params.page, limit=page_params.limit, search=search or None)

    if category:
        category_obj = crud_category.resolve(db, category)
        # An unknown category leaves the listing unfiltered
        if category_obj:
            query.category_id = category_obj.id

    posts, total = crud_post.list_posts(db, query)

    return APIResponse(
        count=len(posts),
        pagination=build_pagination(query.page, query.limit, total),
        data=PostListData(
            posts=[_enrich_post_response(db, post, LIST_COMMENT_PREVIEW) for post in posts]
        ),
    )


@router.get(
    "/trending",
    response_model=APIResponse[TrendingPostListData],
    status_code=status.HTTP_200_OK,
    summary="Get trending posts",
    description="""
    Top 5 published posts by number of comments, ties broken by view count.

    Recomputed on every request.

    **Access:** Public
    """,
)
def get_trending_posts(
    db: Session = Depends(get_db),
) -> APIResponse[TrendingPostListData]:
    ranked = crud_post.get_trending(db)
    posts = [
        TrendingPostResponse(
            id=post.id,
            title=post.title,
            content=post.content,
            excerpt=post.excerpt,
            author=AuthorSummary.model_validate(post.author),
            category=CategorySummary.model_validate(post.category),
            tags=post.tags or [],
            featured_image=post.featured_image,
            view_count=post.view_count,
            is_featured=bool(post.is_featured),
            comments_count=comments_count,
            created_at=post.created_at,
        )
        for post, comments_count in ranked
    ]
    return APIResponse(count=len(posts), data=TrendingPostListData(posts=posts))


@router.get(
    "/category/{category_id}",
    response_model=APIResponse[PostCategoryListData],
    status_code=status.HTTP_200_OK,
    summary="List posts of a category",
)
def list_posts_by_category(
    category_id: int,
    page_params: PageParams = Depends(get_page_params),
    db: Session = Depends(get_db),
) -> APIResponse[PostCategoryListData]:
    """Published posts of one category, newest first."""
    category = crud_category.get(db, category_id)
    if not category:
        raise NotFoundException("Category")

    query = PostQuery(category_id=category.id, page=page_params.page, limit=page_params.limit)
    posts, total = crud_post.list_posts(db, query)

    return APIResponse(
        count=len(posts),
        pagination=build_pagination(query.page, query.limit, total),
        data=PostCategoryListData(
            category=CategoryInfo.model_validate(category),
            posts=[_enrich_post_response(db, post, LIST_COMMENT_PREVIEW) for post in posts],
        ),
    )


@router.get(
    "/{post_id}",
    response_model=APIResponse[PostDetailData],
    status_code=status.HTTP_200_OK,
    summary="Get post detail",
    description="""
    Get a post with all of its approved comments. Every call adds one view.

    Drafts and archived posts are only visible to their author and admins.

    **Access:** Public
    """,
)
def get_post(
    post_id: int,
    current_user: Optional[User] = Depends(get_optional_current_user),
    db: Session = Depends(get_db),
) -> APIResponse[PostDetailData]:
    post = crud_post.get(db, post_id)
    if not post:
        raise NotFoundException("Post")

    if post.status != PostStatus.PUBLISHED:
        is_owner = current_user is not None and (
            current_user.id == post.author_id or current_user.is_admin
        )
        if not is_owner:
            raise NotFoundException("Post")

    post = crud_post.increment_view_count(db, post=post)
    return APIResponse(data=PostDetailData(post=_enrich_post_response(db, post, detail=True)))


@router.post(
    "",
    response_model=APIResponse[PostData],
    status_code=status.HTTP_201_CREATED,
    summary="Create new post",
    description="""
    Create a post. `category` accepts a category id or name.

    **Access:** Authenticated users
    """,
)
def create_post(
    post_in: PostCreate,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
) -> APIResponse[PostData]:
    category = _resolve_category_or_400(db, post_in.category)
    post = crud_post.create_post(db, author_id=current_user.id, category=category, post_in=post_in)
    logger.info(f"Post id={post.id} created by user id={current_user.id}")
    return APIResponse(
        message="Post created successfully",
        data=PostData(post=_enrich_post_response(db, post)),
    )


@router.put(
    "/{post_id}",
    response_model=APIResponse[PostData],
    status_code=status.HTTP_200_OK,
    summary="Update post",
    description="""
    Update a post. Only provided fields change.

    **Access:** Post author or admin
    """,
)
def update_post(
    post_id: int,
    post_in: PostUpdate,
    post: Post = Depends(require_owner(crud_post, id_param="post_id", label="Post")),
    db: Session = Depends(get_db),
) -> APIResponse[PostData]:
    category = None
    if post_in.category is not None:
        category = _resolve_category_or_400(db, post_in.category)

    post = crud_post.update_post(db, post=post, post_in=post_in, category=category)
    return APIResponse(
        message="Post updated successfully",
        data=PostData(post=_enrich_post_response(db, post)),
    )


@router.delete(
    "/{post_id}",
    response_model=APIResponse[None],
    status_code=status.HTTP_200_OK,
    summary="Delete post",
    description="""
    Delete a post together with its comments.

    **Access:** Post author or admin
    """,
)
def delete_post(
    post_id: int,
    post: Post = Depends(require_owner(crud_post, id_param="post_id", label="Post")),
    db: Session = Depends(get_db),
) -> APIResponse[None]:
    crud_post.delete(db, db_obj=post)
    logger.info(f"Post id={post_id} deleted")
    return APIResponse(message="Post deleted successfully")


__all__ = ["router"]
