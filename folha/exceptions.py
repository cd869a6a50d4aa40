# folha/exceptions.py

"""
Hierarquia de erros do motor de folha.

Todos os erros sobem para quem chamou (a camada HTTP), que é a responsável por
traduzi-los em mensagens para o usuário. O motor nunca devolve resultado parcial.
"""

from typing import Any, Dict, Optional


class PayrollError(Exception):
    """Erro de negócio com contexto estruturado (vai para o campo `details` da API)."""

    status_code: int = 500

    def __init__(self, message: str, context: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.message = message
        self.context = context or {}


class InputValidationError(PayrollError):
    """Dados do funcionário inválidos (valores negativos, tipos errados...)."""

    status_code = 400


class DegenerateScheduleError(InputValidationError):
    """Jornada sem horas (horas/dia, dias/semana ou dias no mês <= 0)."""


class UnknownUnhealthyLevelError(InputValidationError):
    """Grau de insalubridade fora de none/low/medium/high."""


class NegativeNetSalaryError(InputValidationError):
    """Descontos maiores que os proventos quando a regra não permite líquido negativo."""


class EmployeeNotFoundError(PayrollError):
    status_code = 404


class RateTableError(PayrollError):
    """Tabela de INSS/IRRF mal configurada. Erro de configuração, não do usuário."""

    status_code = 500


class DuplicateEmployeeError(PayrollError):
    """Cadastro com id já existente."""

    status_code = 409
