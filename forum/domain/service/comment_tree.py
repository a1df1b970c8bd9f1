"""Comment thread assembly.

Turns the flat comment rows of a post into a nested reply tree, with vote
tallies, the viewer's own vote and badge-derived author details attached
to every node.
"""

from collections import Counter, defaultdict
from collections.abc import Collection, Mapping
from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional

import logfire

from forum.domain.error import InvalidArgumentError
from forum.domain.model import Badge, Comment, Vote
from forum.domain.value import BadgeType, CommentId, PostId, UserId, VoteType

DEFAULT_RANK = "Member"
AUTHOR_BADGE_LIMIT = 3


@dataclass
class CommentNode:
    """Node in a post's comment tree.

    Carries every field of the underlying comment plus the values derived
    for display. ``replies`` holds the direct children, oldest first.
    """

    id: CommentId
    post_id: PostId
    parent_id: Optional[CommentId]
    author_id: UserId
    author_name: str
    author_image: Optional[str]
    content: str
    created_at: datetime
    updated_at: datetime
    upvotes: int = 0
    downvotes: int = 0
    user_vote: Optional[str] = None
    author_rank: str = DEFAULT_RANK
    author_badges: list[Badge] = field(default_factory=list)
    author_is_verified: bool = False
    replies: list["CommentNode"] = field(default_factory=list)


def _ensure_collection(value: object, item_type: type, name: str) -> None:
    if isinstance(value, (str, bytes, Mapping)) or not isinstance(value, Collection):
        raise InvalidArgumentError(
            f"{name} must be a collection, got {type(value).__name__}"
        )
    for item in value:
        if not isinstance(item, item_type):
            raise InvalidArgumentError(
                f"{name} must contain {item_type.__name__} items, "
                f"got {type(item).__name__}"
            )


def _chronological(comment: Comment) -> tuple[datetime, str]:
    return (comment.created_at, comment.id)


def build_comment_tree(
    post_id: PostId,
    comments: Collection[Comment],
    votes: Collection[Vote],
    viewer_id: Optional[UserId] = None,
    badges_by_author: Optional[Mapping[UserId, list[Badge]]] = None,
    *,
    default_rank: str = DEFAULT_RANK,
    badge_limit: int = AUTHOR_BADGE_LIMIT,
) -> list[CommentNode]:
    """Build the reply tree for a post.

    Top-level comments are returned newest first; replies at every deeper
    level are ordered oldest first. Ties on ``created_at`` are broken by
    comment ID so the result never depends on input order.

    Comments whose parent is missing from ``comments`` can't be reached from
    a top-level comment and are left out; so are comments belonging to a
    different post. Both cases are logged, not raised. Duplicate votes by
    one user on one comment are counted as they are.

    Args:
        post_id: The post the tree is built for
        comments: Every comment on the post, in any order
        votes: Every vote targeting any of those comments
        viewer_id: User the tree is rendered for, if any
        badges_by_author: Author ID -> badges, most recently earned first
        default_rank: Rank shown for authors without badges
        badge_limit: Maximum number of badges shown per author

    Returns:
        Root comment nodes with their replies populated

    Raises:
        InvalidArgumentError: If comments or votes is not a collection of
            the expected entities, or badges_by_author is not a mapping
    """
    _ensure_collection(comments, Comment, "comments")
    _ensure_collection(votes, Vote, "votes")
    if badges_by_author is None:
        badges_by_author = {}
    elif not isinstance(badges_by_author, Mapping):
        raise InvalidArgumentError(
            "badges_by_author must be a mapping, "
            f"got {type(badges_by_author).__name__}"
        )

    if not comments:
        return []

    # Index votes by target comment: comment_id -> [votes]
    votes_by_comment: dict[CommentId, list[Vote]] = defaultdict(list)
    for vote in votes:
        if vote.comment_id is not None:
            votes_by_comment[vote.comment_id].append(vote)

    duplicates = Counter(
        (vote.user_id, vote.comment_id) for vote in votes if vote.comment_id
    )
    duplicate_pairs = sum(1 for count in duplicates.values() if count > 1)
    if duplicate_pairs:
        logfire.warn(
            "Duplicate comment votes counted",
            post_id=str(post_id),
            pairs=duplicate_pairs,
        )

    # Adjacency: parent_id -> [children], each list oldest first
    children: dict[Optional[CommentId], list[Comment]] = defaultdict(list)
    foreign = 0
    for comment in comments:
        if comment.post_id != post_id:
            foreign += 1
            continue
        children[comment.parent_id].append(comment)
    for siblings in children.values():
        siblings.sort(key=_chronological)

    if foreign:
        logfire.warn(
            "Skipped comments from another post", post_id=str(post_id), count=foreign
        )

    def make_node(comment: Comment) -> CommentNode:
        upvotes = downvotes = 0
        viewer_vote: Optional[Vote] = None
        for vote in votes_by_comment.get(comment.id, []):
            if vote.type is VoteType.UP:
                upvotes += 1
            else:
                downvotes += 1
            if viewer_id is not None and vote.user_id == viewer_id:
                if viewer_vote is None or (vote.created_at, vote.id) < (
                    viewer_vote.created_at,
                    viewer_vote.id,
                ):
                    viewer_vote = vote

        badges = list(badges_by_author.get(comment.author_id) or [])[:badge_limit]

        return CommentNode(
            id=comment.id,
            post_id=comment.post_id,
            parent_id=comment.parent_id,
            author_id=comment.author_id,
            author_name=comment.author_name,
            author_image=comment.author_image,
            content=comment.content,
            created_at=comment.created_at,
            updated_at=comment.updated_at,
            upvotes=upvotes,
            downvotes=downvotes,
            user_vote=viewer_vote.type.display if viewer_vote else None,
            author_rank=badges[0].name if badges else default_rank,
            author_badges=badges,
            author_is_verified=any(
                badge.type is BadgeType.ACHIEVEMENT for badge in badges
            ),
        )

    roots = [make_node(comment) for comment in children.get(None, [])]
    roots.sort(key=lambda node: (node.created_at, node.id), reverse=True)

    # Walk down from the roots with an explicit stack; the visited set stops
    # repeated IDs from being expanded twice.
    visited: set[CommentId] = {node.id for node in roots}
    stack = list(roots)
    while stack:
        node = stack.pop()
        for child in children.get(node.id, []):
            if child.id in visited:
                continue
            visited.add(child.id)
            child_node = make_node(child)
            node.replies.append(child_node)
            stack.append(child_node)

    placed = len({comment.id for comment in comments if comment.post_id == post_id})
    if len(visited) < placed:
        logfire.warn(
            "Excluded unreachable comments from tree",
            post_id=str(post_id),
            count=placed - len(visited),
        )

    return roots
