# tests/conftest.py

import os

# Testes não gravam arquivo de log
os.environ.setdefault("LOG_TO_FILE", "false")
os.environ.setdefault("LOG_LEVEL", "WARNING")
