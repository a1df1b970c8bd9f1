"""Get comment tree use case."""

from datetime import datetime

import logfire
from pydantic import BaseModel

from forum.config import CommentSettings
from forum.domain.error import NotFoundError
from forum.domain.model import Badge
from forum.domain.service import (
    BadgeService,
    CommentNode,
    CommentService,
    JWTService,
    PostService,
    VoteService,
    build_comment_tree,
)
from forum.domain.value import PostId


class BadgeItem(BaseModel):
    """Badge shown next to an author."""

    id: str
    name: str
    icon: str
    type: str
    level: str

    @classmethod
    def from_badge(cls, badge: Badge) -> "BadgeItem":
        return cls(
            id=str(badge.id),
            name=badge.name,
            icon=badge.icon,
            type=badge.type.value,
            level=badge.level.value,
        )


class CommentItem(BaseModel):
    """Comment in a thread, with its replies."""

    id: str
    post_id: str
    parent_id: str | None
    author_id: str
    author_name: str
    author_image: str | None
    content: str
    created_at: datetime
    updated_at: datetime
    upvotes: int
    downvotes: int
    user_vote: str | None
    author_rank: str
    author_badges: list[BadgeItem]
    author_is_verified: bool
    replies: list["CommentItem"]


def to_comment_item(root: CommentNode) -> CommentItem:
    """Convert a built tree node, and everything below it, to a response item.

    Walks the tree with an explicit stack so deep threads don't hit the
    recursion limit.
    """

    def shallow(node: CommentNode) -> CommentItem:
        return CommentItem(
            id=str(node.id),
            post_id=str(node.post_id),
            parent_id=str(node.parent_id) if node.parent_id else None,
            author_id=str(node.author_id),
            author_name=node.author_name,
            author_image=node.author_image,
            content=node.content,
            created_at=node.created_at,
            updated_at=node.updated_at,
            upvotes=node.upvotes,
            downvotes=node.downvotes,
            user_vote=node.user_vote,
            author_rank=node.author_rank,
            author_badges=[BadgeItem.from_badge(b) for b in node.author_badges],
            author_is_verified=node.author_is_verified,
            replies=[],
        )

    item = shallow(root)
    stack = [(root, item)]
    while stack:
        node, parent_item = stack.pop()
        for reply in node.replies:
            reply_item = shallow(reply)
            parent_item.replies.append(reply_item)
            stack.append((reply, reply_item))
    return item


class GetCommentTreeRequest(BaseModel):
    """Get comment tree request."""

    post_id: str
    auth_token: str | None = None  # JWT token for authentication (optional)


class GetCommentTreeResponse(BaseModel):
    """Get comment tree response."""

    post_id: str
    comments: list[CommentItem]
    total: int  # Number of comments in the tree, replies included


class GetCommentTreeUseCase:
    """Use case for reading a post's threaded comments."""

    def __init__(
        self,
        post_service: PostService,
        comment_service: CommentService,
        vote_service: VoteService,
        badge_service: BadgeService,
        jwt_service: JWTService,
        comment_settings: CommentSettings,
    ) -> None:
        """Initialize get comment tree use case.

        Args:
            post_service: Post domain service
            comment_service: Comment domain service
            vote_service: Vote domain service
            badge_service: Badge domain service
            jwt_service: JWT service for identifying the viewer
            comment_settings: Thread display configuration
        """
        self.post_service = post_service
        self.comment_service = comment_service
        self.vote_service = vote_service
        self.badge_service = badge_service
        self.jwt_service = jwt_service
        self.comment_settings = comment_settings

    async def execute(self, request: GetCommentTreeRequest) -> GetCommentTreeResponse:
        """Execute get comment tree flow.

        Steps:
        1. Resolve the viewer from the token (invalid tokens read as anonymous)
        2. Fetch the post's comments, then the votes on them
        3. Fetch badges once per distinct author
        4. Build the tree

        Args:
            request: Get comment tree request

        Returns:
            Root comments, newest first, with nested replies oldest first

        Raises:
            NotFoundError: If the post doesn't exist
        """
        post_id = PostId(request.post_id)
        with logfire.span("get_comment_tree", post_id=request.post_id):
            post = await self.post_service.get_post_by_id(post_id)
            if not post:
                raise NotFoundError("Post", request.post_id)

            viewer_id = self.jwt_service.get_user_id_from_token(request.auth_token)

            comments = await self.comment_service.get_comments_for_post(post_id)
            votes = await self.vote_service.get_votes_for_comments(
                [comment.id for comment in comments]
            )
            badges = await self.badge_service.get_badges_for_authors(
                [comment.author_id for comment in comments],
                limit=self.comment_settings.author_badge_limit,
            )

            roots = build_comment_tree(
                post_id,
                comments,
                votes,
                viewer_id=viewer_id,
                badges_by_author=badges,
                default_rank=self.comment_settings.default_rank,
                badge_limit=self.comment_settings.author_badge_limit,
            )

            items = [to_comment_item(root) for root in roots]
            total = _count(items)
            logfire.info(
                "Comment tree built",
                post_id=request.post_id,
                roots=len(items),
                total=total,
                fetched=len(comments),
            )
            return GetCommentTreeResponse(
                post_id=request.post_id, comments=items, total=total
            )


def _count(items: list[CommentItem]) -> int:
    total = 0
    stack = list(items)
    while stack:
        item = stack.pop()
        total += 1
        stack.extend(item.replies)
    return total
