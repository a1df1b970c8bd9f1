"""Vote use cases."""

from .get_comment_votes import (
    GetCommentVotesRequest,
    GetCommentVotesResponse,
    GetCommentVotesUseCase,
)
from .vote_on_comment import (
    VoteOnCommentRequest,
    VoteOnCommentResponse,
    VoteOnCommentUseCase,
)
from .vote_on_post import VoteOnPostRequest, VoteOnPostResponse, VoteOnPostUseCase

__all__ = [
    "GetCommentVotesRequest",
    "GetCommentVotesResponse",
    "GetCommentVotesUseCase",
    "VoteOnCommentRequest",
    "VoteOnCommentResponse",
    "VoteOnCommentUseCase",
    "VoteOnPostRequest",
    "VoteOnPostResponse",
    "VoteOnPostUseCase",
]
