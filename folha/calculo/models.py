# folha/calculo/models.py

"""
Modelos de entrada (snapshot do funcionário) e de saída (holerite calculado).

Os dois são imutáveis: o motor lê o snapshot e produz um CalculoFolha novo a
cada chamada. Atributos em snake_case, JSON em camelCase (o que o frontend manda).
"""

from decimal import Decimal
from enum import Enum
from typing import Annotated, Any, Optional

from pydantic import BaseModel, ConfigDict, Field, PlainSerializer, field_validator
from pydantic.alias_generators import to_camel

# Valores monetários: Decimal internamente, número no JSON
Valor = Annotated[Decimal, PlainSerializer(float, return_type=float, when_used="json")]
Dinheiro = Annotated[Valor, Field(ge=0)]

# Teto dos valores informados: acima disso o Decimal perde os centavos no arredondamento
VALOR_MAXIMO = Decimal("1e12")
# Horas num mês de 31 dias
HORAS_MES_MAXIMO = Decimal("744")
ValorInformado = Annotated[Valor, Field(ge=0, le=VALOR_MAXIMO)]
HorasInformadas = Annotated[Valor, Field(ge=0, le=HORAS_MES_MAXIMO)]


class NivelInsalubridade(str, Enum):
    NONE = "none"
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class Funcionario(BaseModel):
    model_config = ConfigDict(
        frozen=True, alias_generator=to_camel, populate_by_name=True, extra="ignore"
    )

    # --- Identificação ---
    id: Optional[int] = None
    name: str = Field(min_length=1)
    cpf: str = ""
    position: Optional[str] = None

    # --- Remuneração e jornada ---
    gross_salary: ValorInformado
    hours_per_day: int = Field(gt=0, le=24)
    days_per_week: int = Field(gt=0, le=7)
    work_days_in_month: int = Field(gt=0, le=31)

    # --- IRRF ---
    dependents: int = Field(default=0, ge=0)
    pension_alimony: ValorInformado = Decimal("0")

    # --- Adicionais de risco ---
    is_dangerous: bool = False
    unhealthy_level: NivelInsalubridade = NivelInsalubridade.NONE

    # --- Benefícios ---
    transport_voucher_value: ValorInformado = Decimal("0")
    meal_voucher_daily: ValorInformado = Decimal("0")
    has_health_plan: bool = False
    health_plan_value: ValorInformado = Decimal("0")
    has_dental_plan: bool = False
    dental_plan_value: ValorInformado = Decimal("0")
    has_gym: bool = False
    gym_value: ValorInformado = Decimal("0")

    # --- Horas extras e banco de horas ---
    has_overtime: bool = False
    overtime_hours: HorasInformadas = Decimal("0")
    has_time_bank: bool = False
    time_bank_hours: HorasInformadas = Decimal("0")

    @field_validator("unhealthy_level", mode="before")
    @classmethod
    def normalizar_nivel(cls, v: Any):
        # "HIGH", " High " -> "high"; valores desconhecidos continuam sendo rejeitados
        if isinstance(v, str):
            return v.strip().lower()
        return v


class CalculoFolha(BaseModel):
    """Holerite calculado. Descontos vêm como valores positivos."""

    model_config = ConfigDict(frozen=True, alias_generator=to_camel, populate_by_name=True)

    employee: Funcionario
    reference_month: str

    # --- Jornada ---
    hourly_wage: Dinheiro
    weekly_hours: Dinheiro
    monthly_hours: Dinheiro

    # --- Proventos ---
    dangerous_bonus: Dinheiro
    unhealthy_bonus: Dinheiro
    overtime_hours: Dinheiro
    overtime_value: Dinheiro
    time_bank_hours: Dinheiro

    # --- Benefícios ---
    transport_voucher: Dinheiro
    meal_voucher: Dinheiro

    # --- Descontos ---
    inss_calculation_base: Dinheiro
    inss_discount: Dinheiro
    inss_effective_rate: Dinheiro
    irpf_calculation_base: Dinheiro
    irpf_discount: Dinheiro
    irpf_effective_rate: Dinheiro
    transport_voucher_discount: Dinheiro
    health_plan_discount: Dinheiro
    dental_plan_discount: Dinheiro
    gym_discount: Dinheiro
    total_discounts: Dinheiro

    # --- Encargo patronal (informativo, não sai do líquido) ---
    fgts: Dinheiro

    # --- Totais ---
    gross_total: Dinheiro
    net_salary: Valor
