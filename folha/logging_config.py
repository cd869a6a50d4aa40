# folha/logging_config.py

import sys
from pathlib import Path

from loguru import logger

from folha.config import settings

FORMATO_CONSOLE = (
    "<green>{time:YYYY-MM-DD HH:mm:ss}</green> | <level>{level: <8}</level> | "
    "<cyan>{name}</cyan>:<cyan>{line}</cyan> - <level>{message}</level>"
)
FORMATO_ARQUIVO = "{time:YYYY-MM-DD HH:mm:ss} | {level: <8} | {name}:{function}:{line} - {message}"

logger.remove()

# Console: um resumo por holerite (INFO/SUCCESS) e os dados rejeitados (ERROR).
logger.add(sys.stderr, level=settings.LOG_LEVEL, format=FORMATO_CONSOLE, colorize=True)

# Arquivo de auditoria da folha: inclui o DEBUG de cada etapa (jornada, INSS, IRRF, FGTS).
# Desligado nos testes via LOG_TO_FILE=false.
if settings.LOG_TO_FILE:
    logger.add(
        str(Path(settings.LOG_DIR) / "folha_{time}.log"),
        level="DEBUG",
        format=FORMATO_ARQUIVO,
        rotation="10 MB",
        retention="30 days",
        encoding="utf-8",
    )

log = logger
