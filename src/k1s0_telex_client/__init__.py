"""k1s0 telex_client library."""

from .client import TelexClient
from .config import TelexConfig
from .context import TelexContext, from_context, new_context
from .exceptions import TelexClientError, TelexClientErrorCodes, UnexpectedStatusError
from .http_client import HttpTelexClient, new
from .mock_client import ErrorReporter, MockTelexClient
from .mock_server import MockTelexServer, generate_response
from .models import Action, Notification, Result, Target, TargetType

__all__ = [
    "TelexClient",
    "HttpTelexClient",
    "new",
    "MockTelexClient",
    "MockTelexServer",
    "ErrorReporter",
    "generate_response",
    "Notification",
    "Target",
    "TargetType",
    "Action",
    "Result",
    "TelexConfig",
    "TelexContext",
    "new_context",
    "from_context",
    "TelexClientError",
    "TelexClientErrorCodes",
    "UnexpectedStatusError",
]
