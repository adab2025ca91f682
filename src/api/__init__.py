from .base_client import BaseAPIClient
from .pharos_client import PharosAPIClient
from .session import SessionAuthenticator
from .task_verifier import TaskVerifier
