"""Configuration providers."""

from dishka import Scope, provide

from forum.config import AuthSettings, ReplySettings, Settings
from forum.util.di.base import ProviderBase


class ProdConfigProvider(ProviderBase):
    """Settings and the nested sections services depend on.

    Settings are read once per container from the environment and .env.
    """

    scope = Scope.APP

    @provide
    def get_settings(self) -> Settings:
        return Settings()

    @provide
    def get_auth_settings(self, settings: Settings) -> AuthSettings:
        return settings.auth

    @provide
    def get_reply_settings(self, settings: Settings) -> ReplySettings:
        return settings.replies
