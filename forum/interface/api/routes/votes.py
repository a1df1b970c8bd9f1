"""Vote routes."""

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, Cookie, HTTPException, status
from pydantic import BaseModel

from forum.application.usecase.vote import (
    GetCommentVotesRequest,
    GetCommentVotesResponse,
    GetCommentVotesUseCase,
    VoteOnCommentRequest,
    VoteOnCommentResponse,
    VoteOnCommentUseCase,
    VoteOnPostRequest,
    VoteOnPostResponse,
    VoteOnPostUseCase,
)
from forum.domain.error import NotFoundError
from forum.domain.service import JWTService

router = APIRouter(tags=["votes"], route_class=DishkaRoute)


class VoteAPIRequest(BaseModel):
    """API request for casting a vote."""

    vote_type: str  # "up" or "down"


@router.post("/comments/{comment_id}/vote", response_model=VoteOnCommentResponse)
async def vote_on_comment(
    comment_id: str,
    request: VoteAPIRequest,
    vote_on_comment_use_case: FromDishka[VoteOnCommentUseCase],
    jwt_service: FromDishka[JWTService],
    auth_token: str | None = Cookie(default=None),
) -> VoteOnCommentResponse:
    """Vote on a comment.

    Voting again with the same type withdraws the vote; voting with the
    other type switches it. Requires authentication.

    Args:
        comment_id: Comment ID
        request: Vote direction
        vote_on_comment_use_case: Vote on comment use case from DI
        jwt_service: JWT service for token verification (injected)
        auth_token: JWT token from cookie

    Returns:
        Vote outcome and the comment's updated tally

    Raises:
        HTTPException: If not authenticated, the comment is missing, or the
            vote type is invalid
    """
    user_id = jwt_service.get_user_id_from_token(auth_token)
    if not user_id:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Authentication required to vote",
        )

    try:
        use_case_request = VoteOnCommentRequest(
            comment_id=comment_id,
            user_id=user_id,
            vote_type=request.vote_type,
        )
        return await vote_on_comment_use_case.execute(use_case_request)
    except NotFoundError as e:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=str(e),
        )
    except ValueError as e:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=str(e),
        )


@router.get("/comments/{comment_id}/vote", response_model=GetCommentVotesResponse)
async def get_comment_votes(
    comment_id: str,
    get_comment_votes_use_case: FromDishka[GetCommentVotesUseCase],
    auth_token: str | None = Cookie(default=None),
) -> GetCommentVotesResponse:
    """Get a comment's vote tally and, when authenticated, the viewer's vote.

    Args:
        comment_id: Comment ID
        get_comment_votes_use_case: Get comment votes use case from DI
        auth_token: JWT token from cookie (optional)

    Returns:
        Upvote and downvote counts

    Raises:
        HTTPException: If the comment doesn't exist
    """
    try:
        request = GetCommentVotesRequest(comment_id=comment_id, auth_token=auth_token)
        return await get_comment_votes_use_case.execute(request)
    except NotFoundError as e:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=str(e),
        )


@router.post("/posts/{post_id}/vote", response_model=VoteOnPostResponse)
async def vote_on_post(
    post_id: str,
    request: VoteAPIRequest,
    vote_on_post_use_case: FromDishka[VoteOnPostUseCase],
    jwt_service: FromDishka[JWTService],
    auth_token: str | None = Cookie(default=None),
) -> VoteOnPostResponse:
    """Vote on a post.

    Requires authentication.

    Args:
        post_id: Post ID
        request: Vote direction
        vote_on_post_use_case: Vote on post use case from DI
        jwt_service: JWT service for token verification (injected)
        auth_token: JWT token from cookie

    Returns:
        Vote outcome

    Raises:
        HTTPException: If not authenticated, the post is missing, or the
            vote type is invalid
    """
    user_id = jwt_service.get_user_id_from_token(auth_token)
    if not user_id:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Authentication required to vote",
        )

    try:
        use_case_request = VoteOnPostRequest(
            post_id=post_id,
            user_id=user_id,
            vote_type=request.vote_type,
        )
        return await vote_on_post_use_case.execute(use_case_request)
    except NotFoundError as e:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=str(e),
        )
    except ValueError as e:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=str(e),
        )
