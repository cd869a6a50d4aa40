from decimal import Decimal, ROUND_HALF_UP

CENTAVOS = Decimal("0.01")
QUATRO_CASAS = Decimal("0.0001")
ZERO = Decimal("0.00")


def arredondar(valor: Decimal, casas: Decimal = CENTAVOS) -> Decimal:
    """Arredondamento comercial (meio para cima), como o da folha impressa."""
    return Decimal(valor).quantize(casas, rounding=ROUND_HALF_UP)
