import os
import tempfile
from pathlib import Path

# Mock SECRET_KEY for tests BEFORE importing settings to bypass validation
os.environ.setdefault("SECRET_KEY", "django-insecure-test-key-for-unit-tests-only")

from .settings import *  # noqa: F403

# Uploads go to a throwaway directory
FILE_STORAGE["WEB_ROOT"] = Path(tempfile.mkdtemp(prefix="somon-test-"))  # noqa: F405

# Tests replace the client with mongomock; never reach a real server
MONGODB["URI"] = "mongodb://localhost:27017"  # noqa: F405
MONGODB["DATABASE"] = "somon_test"  # noqa: F405
MONGODB["SERVER_SELECTION_TIMEOUT_MS"] = 100  # noqa: F405

# Disable Gemini
GEMINI["API_KEY"] = ""  # noqa: F405
GEMINI["ENDPOINT"] = "http://gemini.invalid"  # noqa: F405

ALLOWED_HOSTS = ["testserver", "localhost"]

LOGGING["root"]["level"] = "WARNING"  # noqa: F405
