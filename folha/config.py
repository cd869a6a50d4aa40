# folha/config.py
from functools import lru_cache
from typing import Literal

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    # --- Identificação ---
    APP_NAME: str = "Folha de Pagamento - Motor de Cálculo"

    # --- Parâmetros do cálculo ---
    # Ano da tabela de INSS/IRRF em vigor
    ANO_TABELA: int = 2024
    # "aditiva": soma periculosidade + insalubridade
    # "maior": paga apenas o maior dos dois adicionais
    POLITICA_ADICIONAIS: Literal["aditiva", "maior"] = "aditiva"
    PERMITE_LIQUIDO_NEGATIVO: bool = True
    FATOR_HORA_EXTRA: float = 1.5

    # --- Logs ---
    LOG_LEVEL: str = "INFO"
    LOG_DIR: str = "logs"
    LOG_TO_FILE: bool = True

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )


@lru_cache()
def get_settings():
    return Settings()


# Instância global
settings = get_settings()
