# folha/calculo/tabelas.py

"""
Tabelas legais (INSS, IRRF) e constantes da folha, por ano.

As tabelas são imutáveis e validadas na construção: faixa mal configurada é
erro de programação e tem que estourar na importação, não no meio de um cálculo.
"""

from dataclasses import dataclass, field
from decimal import Decimal
from typing import Dict, Optional, Tuple

from folha.config import settings
from folha.exceptions import RateTableError
from folha.logging_config import log


@dataclass(frozen=True)
class RateBracket:
    """Faixa de uma tabela progressiva. Vai de `lower` (exclusivo) até `upper` (inclusivo).

    `upper=None` significa faixa aberta (só permitido na última faixa do IRRF).
    `deduction` é a parcela a deduzir do IRRF; no INSS fica zerada.
    """

    lower: Decimal
    upper: Optional[Decimal]
    rate: Decimal
    deduction: Decimal = Decimal("0")

    def contem(self, base: Decimal) -> bool:
        return self.lower <= base and (self.upper is None or base <= self.upper)


def validar_faixas(faixas: Tuple[RateBracket, ...], nome: str, aberta: bool) -> None:
    """Garante faixas contíguas a partir de zero, crescentes e sem buracos."""
    if not faixas:
        raise RateTableError(f"Tabela {nome} sem faixas.", {"tabela": nome})

    if faixas[0].lower != 0:
        raise RateTableError(
            f"Tabela {nome} deve começar em zero.",
            {"tabela": nome, "inicio": str(faixas[0].lower)},
        )

    for anterior, atual in zip(faixas, faixas[1:]):
        if anterior.upper is None:
            raise RateTableError(
                f"Tabela {nome}: só a última faixa pode ser aberta.", {"tabela": nome}
            )
        if atual.lower != anterior.upper:
            raise RateTableError(
                f"Tabela {nome} com buraco entre {anterior.upper} e {atual.lower}.",
                {"tabela": nome, "fim": str(anterior.upper), "inicio": str(atual.lower)},
            )

    for faixa in faixas:
        if faixa.upper is not None and faixa.upper <= faixa.lower:
            raise RateTableError(
                f"Tabela {nome}: faixa com limite invertido ({faixa.lower} -> {faixa.upper}).",
                {"tabela": nome},
            )
        if faixa.rate < 0 or faixa.deduction < 0:
            raise RateTableError(f"Tabela {nome}: alíquota negativa.", {"tabela": nome})

    ultima_aberta = faixas[-1].upper is None
    if ultima_aberta != aberta:
        esperado = "aberta" if aberta else "com teto"
        raise RateTableError(
            f"Tabela {nome}: última faixa deveria ser {esperado}.", {"tabela": nome}
        )


@dataclass(frozen=True)
class TabelaAnual:
    ano: int
    inss: Tuple[RateBracket, ...]
    irrf: Tuple[RateBracket, ...]
    salario_minimo: Decimal
    deducao_dependente: Decimal
    aliquota_fgts: Decimal = Decimal("0.08")
    aliquota_periculosidade: Decimal = Decimal("0.30")
    teto_vale_transporte: Decimal = Decimal("0.06")
    # Insalubridade é calculada sobre o salário mínimo, não sobre o salário base
    insalubridade: Dict[str, Decimal] = field(
        default_factory=lambda: {
            "none": Decimal("0"),
            "low": Decimal("0.10"),
            "medium": Decimal("0.20"),
            "high": Decimal("0.40"),
        }
    )

    def __post_init__(self):
        validar_faixas(self.inss, "INSS", aberta=False)
        validar_faixas(self.irrf, "IRRF", aberta=True)

    @property
    def teto_inss(self) -> Decimal:
        return self.inss[-1].upper


# --- TABELA 2024 ---
TABELA_2024 = TabelaAnual(
    ano=2024,
    inss=(
        RateBracket(Decimal("0"), Decimal("1412.00"), Decimal("0.075")),
        RateBracket(Decimal("1412.00"), Decimal("2666.68"), Decimal("0.09")),
        RateBracket(Decimal("2666.68"), Decimal("4000.03"), Decimal("0.12")),
        RateBracket(Decimal("4000.03"), Decimal("7786.02"), Decimal("0.14")),
    ),
    # Formato: (de, até, alíquota, parcela a deduzir)
    irrf=(
        RateBracket(Decimal("0"), Decimal("2259.20"), Decimal("0"), Decimal("0")),  # Isento
        RateBracket(Decimal("2259.20"), Decimal("2826.65"), Decimal("0.075"), Decimal("169.44")),
        RateBracket(Decimal("2826.65"), Decimal("3751.05"), Decimal("0.15"), Decimal("381.44")),
        RateBracket(Decimal("3751.05"), Decimal("4664.68"), Decimal("0.225"), Decimal("662.77")),
        RateBracket(Decimal("4664.68"), None, Decimal("0.275"), Decimal("896.00")),
    ),
    salario_minimo=Decimal("1412.00"),
    deducao_dependente=Decimal("189.59"),
)

TABELAS: Dict[int, TabelaAnual] = {
    2024: TABELA_2024,
}


def get_tabela(ano: Optional[int] = None) -> TabelaAnual:
    """Busca a tabela do ano, ou a do ano configurado em ANO_TABELA."""
    ano = ano or settings.ANO_TABELA
    tabela = TABELAS.get(ano)
    if tabela is None:
        log.critical(f"Nenhuma tabela de INSS/IRRF cadastrada para {ano}.")
        raise RateTableError(
            f"Tabela de {ano} não cadastrada.", {"ano": ano, "disponiveis": sorted(TABELAS)}
        )
    return tabela
