import logging
from typing import Optional

from fake_useragent import UserAgent

from semijobs.config.settings import DEFAULT_USER_AGENT, Settings

logger = logging.getLogger(__name__)


class UserAgentProvider:
    """
    Picks the user agent for the browser context: the configured research
    UA by default, a fake_useragent string when rotation is enabled.
    """

    _ua: Optional[UserAgent] = None

    @classmethod
    def initialize(cls):
        """
        Initialize the UserAgent generator if not already done.
        """
        if cls._ua is None:
            try:
                cls._ua = UserAgent(
                    browsers=["chrome", "firefox", "safari"],
                    os=["windows", "macos"],
                    fallback=DEFAULT_USER_AGENT,
                )
            except Exception as e:
                logger.warning(f"Failed to initialize fake_useragent, using fallback: {e}")

    @classmethod
    def get(cls, settings: Settings) -> str:
        if not settings.ROTATE_USER_AGENT:
            return settings.USER_AGENT

        cls.initialize()
        if cls._ua:
            return cls._ua.random
        return settings.USER_AGENT
