# folha/calculo/data_validation.py

# Garante que o snapshot do funcionário está no formato esperado antes de qualquer
# conta. O pydantic faz a checagem de tipos e limites; aqui traduzimos os erros dele
# para a nossa hierarquia, para a API saber qual mensagem devolver.

from typing import Any, Dict, Mapping, Union

import pandas as pd
from pydantic import ValidationError

from folha.calculo.models import Funcionario
from folha.exceptions import (
    DegenerateScheduleError,
    InputValidationError,
    UnknownUnhealthyLevelError,
)
from folha.logging_config import log

CAMPOS_JORNADA = {"hours_per_day", "days_per_week", "work_days_in_month"}
CAMPO_INSALUBRIDADE = "unhealthy_level"
CAMPOS_SEM_DEFAULT = {CAMPO_INSALUBRIDADE, "unhealthyLevel"}

_ALIASES = {
    field.alias: nome for nome, field in Funcionario.model_fields.items() if field.alias
}


def _nome_campo(loc) -> str:
    """Converte o `loc` do pydantic (alias camelCase) no nome do atributo."""
    if not loc:
        return ""
    campo = str(loc[0])
    return _ALIASES.get(campo, campo)


def validar_funcionario(dados: Union[Funcionario, Mapping[str, Any]]) -> Funcionario:
    """
    Valida um dicionário (JSON, linha de planilha) e devolve o snapshot imutável.
    Nunca assume default para valor inválido: rejeita.
    """
    if isinstance(dados, Funcionario):
        return dados

    try:
        return Funcionario.model_validate(dict(dados))
    except ValidationError as e:
        erros = [
            {"campo": _nome_campo(err["loc"]), "erro": err["msg"]}
            for err in e.errors(include_url=False)
        ]
        campos = {erro["campo"] for erro in erros}
        contexto = {"funcionario": dados.get("name", "N/A"), "erros": erros}

        log.error(f"Erro de validação do funcionário {contexto['funcionario']}: {erros}")

        if campos & CAMPOS_JORNADA:
            raise DegenerateScheduleError(
                "Jornada inválida: horas por dia, dias por semana e dias no mês devem ser positivos.",
                contexto,
            ) from e
        if CAMPO_INSALUBRIDADE in campos:
            raise UnknownUnhealthyLevelError(
                "Grau de insalubridade inválido (use none, low, medium ou high).",
                contexto,
            ) from e
        raise InputValidationError("Dados do funcionário inválidos.", contexto) from e


def limpar_registro(registro: Mapping[str, Any]) -> Dict[str, Any]:
    """
    Converte célula vazia em ausência (assume o default do modelo) e tipos numpy em nativos.
    Insalubridade não tem default seguro: vazia segue como None e o modelo rejeita.
    """
    limpo = {}
    for chave, valor in registro.items():
        vazio = valor is None or (pd.api.types.is_scalar(valor) and pd.isna(valor))
        if vazio:
            if chave in CAMPOS_SEM_DEFAULT:
                limpo[chave] = None
            continue
        if hasattr(valor, "item"):
            valor = valor.item()
        limpo[chave] = valor
    return limpo
