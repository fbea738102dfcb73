"""Domain layer DI providers."""

from dishka import Scope, provide

from forum.config import AuthSettings
from forum.domain.repository import PostRepository, ReplyRepository, UserRepository
from forum.domain.service import (
    JWTService,
    PostService,
    ReplyService,
    UserService,
    VoteService,
)
from forum.util.di.base import ProviderBase


class ProdDomainProvider(ProviderBase):
    """Domain services, built per request on top of that request's repositories."""

    scope = Scope.REQUEST

    @provide
    def get_jwt_service(self, auth_settings: AuthSettings) -> JWTService:
        """Provide JWT token domain service."""
        return JWTService(auth_settings=auth_settings)

    @provide
    def get_user_service(self, user_repository: UserRepository) -> UserService:
        """Provide user domain service."""
        return UserService(user_repository=user_repository)

    @provide
    def get_post_service(self, post_repository: PostRepository) -> PostService:
        """Provide post domain service."""
        return PostService(post_repository=post_repository)

    @provide
    def get_reply_service(
        self, reply_repository: ReplyRepository, post_service: PostService
    ) -> ReplyService:
        """Provide reply domain service."""
        return ReplyService(
            reply_repository=reply_repository, post_service=post_service
        )

    @provide
    def get_vote_service(
        self, post_service: PostService, reply_service: ReplyService
    ) -> VoteService:
        """Provide vote domain service."""
        return VoteService(post_service=post_service, reply_service=reply_service)
