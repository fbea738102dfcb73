"""Application layer DI providers."""

from dishka import Scope, provide

from forum.application.usecase.post import CreatePostUseCase, GetPostUseCase
from forum.application.usecase.reply import (
    AcceptReplyUseCase,
    CreateReplyUseCase,
    DeleteReplyUseCase,
    GetRepliesUseCase,
    GetUserRepliesUseCase,
    UpdateReplyUseCase,
)
from forum.application.usecase.vote import ToggleVoteUseCase
from forum.config import ReplySettings
from forum.domain.service import PostService, ReplyService, UserService, VoteService
from forum.util.di.base import ProviderBase


class ProdApplicationProvider(ProviderBase):
    """One use case per endpoint operation."""

    # Post use cases
    @provide(scope=Scope.REQUEST)
    def get_create_post_use_case(
        self, post_service: PostService, user_service: UserService
    ) -> CreatePostUseCase:
        """Provide create post use case."""
        return CreatePostUseCase(post_service=post_service, user_service=user_service)

    @provide(scope=Scope.REQUEST)
    def get_get_post_use_case(self, post_service: PostService) -> GetPostUseCase:
        """Provide get post use case."""
        return GetPostUseCase(post_service=post_service)

    # Reply use cases
    @provide(scope=Scope.REQUEST)
    def get_create_reply_use_case(
        self,
        reply_service: ReplyService,
        post_service: PostService,
        user_service: UserService,
    ) -> CreateReplyUseCase:
        """Provide create reply use case."""
        return CreateReplyUseCase(
            reply_service=reply_service,
            post_service=post_service,
            user_service=user_service,
        )

    @provide(scope=Scope.REQUEST)
    def get_get_replies_use_case(
        self, reply_service: ReplyService, post_service: PostService
    ) -> GetRepliesUseCase:
        """Provide get replies use case."""
        return GetRepliesUseCase(reply_service=reply_service, post_service=post_service)

    @provide(scope=Scope.REQUEST)
    def get_get_user_replies_use_case(
        self, reply_service: ReplyService, reply_settings: ReplySettings
    ) -> GetUserRepliesUseCase:
        """Provide get user replies use case."""
        return GetUserRepliesUseCase(
            reply_service=reply_service, reply_settings=reply_settings
        )

    @provide(scope=Scope.REQUEST)
    def get_update_reply_use_case(
        self, reply_service: ReplyService
    ) -> UpdateReplyUseCase:
        """Provide update reply use case."""
        return UpdateReplyUseCase(reply_service=reply_service)

    @provide(scope=Scope.REQUEST)
    def get_delete_reply_use_case(
        self, reply_service: ReplyService, user_service: UserService
    ) -> DeleteReplyUseCase:
        """Provide delete reply use case."""
        return DeleteReplyUseCase(
            reply_service=reply_service, user_service=user_service
        )

    @provide(scope=Scope.REQUEST)
    def get_accept_reply_use_case(
        self,
        reply_service: ReplyService,
        post_service: PostService,
        user_service: UserService,
    ) -> AcceptReplyUseCase:
        """Provide accept reply use case."""
        return AcceptReplyUseCase(
            reply_service=reply_service,
            post_service=post_service,
            user_service=user_service,
        )

    # Vote use cases
    @provide(scope=Scope.REQUEST)
    def get_toggle_vote_use_case(self, vote_service: VoteService) -> ToggleVoteUseCase:
        """Provide toggle vote use case."""
        return ToggleVoteUseCase(vote_service=vote_service)
