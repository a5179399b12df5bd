from .common import (
	APIResponse,
	Pagination,
	FieldError,
	AuthorSummary,
	AuthorDetail,
	CategorySummary,
	build_pagination,
)
from .user import (
	UserCreate,
	UserLogin,
	UserProfileUpdate,
	UserStatusUpdate,
	UserResponse,
)
from .category import (
	CategoryCreate,
	CategoryUpdate,
	CategoryResponse,
)
from .post import (
	PostCreate,
	PostUpdate,
	PostResponse,
	TrendingPostResponse,
)
from .comment import (
	CommentCreate,
	CommentUpdate,
	CommentApproval,
	CommentResponse,
	ReplyResponse,
)

__all__ = [
	# Common
	"APIResponse",
	"Pagination",
	"FieldError",
	"AuthorSummary",
	"AuthorDetail",
	"CategorySummary",
	"build_pagination",
	# User
	"UserCreate",
	"UserLogin",
	"UserProfileUpdate",
	"UserStatusUpdate",
	"UserResponse",
	# Category
	"CategoryCreate",
	"CategoryUpdate",
	"CategoryResponse",
	# Post
	"PostCreate",
	"PostUpdate",
	"PostResponse",
	"TrendingPostResponse",
	# Comment
	"CommentCreate",
	"CommentUpdate",
	"CommentApproval",
	"CommentResponse",
	"ReplyResponse",
]
