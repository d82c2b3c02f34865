"""Service for messages sent by users to the administrators."""

from __future__ import annotations

import logging

from facility_reservations.domain.errors import PermissionDeniedError, ValidationError
from facility_reservations.domain.models import Message, Requester
from facility_reservations.repos.memory import MessageRepository

logger = logging.getLogger(__name__)


class MessageService:
    def __init__(self, message_repo: MessageRepository, admin_role: str = "admin") -> None:
        self.message_repo = message_repo
        self.admin_role = admin_role

    def send(self, requester: Requester, content: str) -> Message:
        if not content.strip():
            raise ValidationError("Message content is required")
        message = Message(user_id=requester.user_id, content=content.strip())
        self.message_repo.add(message)
        logger.info("message %s sent by %s", message.id, requester.user_id)
        return message

    def list_mine(self, requester: Requester) -> list[Message]:
        return self.message_repo.list_for_user(requester.user_id)

    def list_all(self, requester: Requester) -> list[Message]:
        """Every message in the admin inbox, oldest first."""
        if requester.role != self.admin_role:
            raise PermissionDeniedError("Only administrators can read all messages")
        return self.message_repo.list_all()
