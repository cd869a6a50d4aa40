# folha/calculo/regras.py

"""
Regras de negócio configuráveis do cálculo (as "chaves" que mudam de empresa
para empresa sem mexer nas tabelas legais).
"""

from dataclasses import dataclass
from decimal import Decimal
from enum import Enum

from folha.config import settings


class PoliticaAdicionais(str, Enum):
    """Como combinar periculosidade e insalubridade quando o funcionário tem as duas."""

    ADITIVA = "aditiva"  # soma os dois adicionais
    MAIOR = "maior"  # paga só o maior (CLT art. 193 §2º)


@dataclass(frozen=True)
class RegrasFolha:
    politica_adicionais: PoliticaAdicionais = PoliticaAdicionais.ADITIVA
    fator_hora_extra: Decimal = Decimal("1.5")
    permite_liquido_negativo: bool = True


def regras_padrao() -> RegrasFolha:
    """Monta as regras a partir do .env / variáveis de ambiente."""
    return RegrasFolha(
        politica_adicionais=PoliticaAdicionais(settings.POLITICA_ADICIONAIS),
        fator_hora_extra=Decimal(str(settings.FATOR_HORA_EXTRA)),
        permite_liquido_negativo=settings.PERMITE_LIQUIDO_NEGATIVO,
    )
