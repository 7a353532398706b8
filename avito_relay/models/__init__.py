from avito_relay.models.base import Base
from avito_relay.models.messaging_integration import MessagingIntegration
from avito_relay.models.outgoing_message import OutgoingMessage
from avito_relay.models.user_credential import UserCredential

__all__ = [
    "Base",
    "UserCredential",
    "MessagingIntegration",
    "OutgoingMessage",
]
