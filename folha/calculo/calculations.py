# folha/calculo/calculations.py

"""
As "ferramentas" do motor: uma função pura por etapa do holerite.

Nenhuma função aqui guarda estado ou mexe no funcionário. Todas recebem a
tabela do ano explicitamente, então o mesmo input dá sempre o mesmo resultado.
Os valores intermediários voltam sem arredondar; quem arredonda é o montador
(engine.py) ou a própria função quando o valor é um desconto legal.
"""

from decimal import Decimal
from typing import NamedTuple, Sequence, Tuple

from folha.calculo.models import Funcionario, NivelInsalubridade
from folha.calculo.regras import PoliticaAdicionais
from folha.calculo.tabelas import RateBracket, TabelaAnual
from folha.exceptions import DegenerateScheduleError, RateTableError, UnknownUnhealthyLevelError
from folha.logging_config import log
from folha.shared.utils import QUATRO_CASAS, ZERO, arredondar


class Jornada(NamedTuple):
    horas_semanais: Decimal
    horas_mensais: Decimal
    salario_hora: Decimal


class ResultadoINSS(NamedTuple):
    desconto: Decimal
    aliquota_efetiva: Decimal


class ResultadoIRRF(NamedTuple):
    desconto: Decimal
    aliquota_efetiva: Decimal
    base_calculo: Decimal


# --- JORNADA E SALÁRIO-HORA ---


def calc_jornada(funcionario: Funcionario) -> Jornada:
    """
    Horas semanais = horas/dia x dias/semana.
    Horas mensais = horas semanais x (dias trabalhados no mês / dias por semana).
    Salário-hora = salário base / horas mensais.
    """
    horas_dia = Decimal(funcionario.hours_per_day)
    dias_semana = Decimal(funcionario.days_per_week)
    dias_mes = Decimal(funcionario.work_days_in_month)

    if horas_dia <= 0 or dias_semana <= 0 or dias_mes <= 0:
        raise DegenerateScheduleError(
            "Jornada sem horas: não dá para calcular o salário-hora.",
            {
                "hoursPerDay": funcionario.hours_per_day,
                "daysPerWeek": funcionario.days_per_week,
                "workDaysInMonth": funcionario.work_days_in_month,
            },
        )

    horas_semanais = horas_dia * dias_semana
    horas_mensais = horas_semanais * (dias_mes / dias_semana)
    salario_hora = funcionario.gross_salary / horas_mensais

    log.debug(
        f"[Cálculo] Jornada: {horas_semanais}h/semana, {arredondar(horas_mensais)}h/mês, "
        f"Salário-hora R$ {arredondar(salario_hora)}"
    )
    return Jornada(horas_semanais, horas_mensais, salario_hora)


# --- ADICIONAIS ---


def calc_periculosidade(funcionario: Funcionario, tabela: TabelaAnual) -> Decimal:
    """30% sobre o salário base, só para quem trabalha em atividade perigosa."""
    if not funcionario.is_dangerous:
        return ZERO
    return funcionario.gross_salary * tabela.aliquota_periculosidade


def calc_insalubridade(nivel: NivelInsalubridade, tabela: TabelaAnual) -> Decimal:
    """10%, 20% ou 40% do salário mínimo, conforme o grau."""
    try:
        aliquota = tabela.insalubridade[NivelInsalubridade(nivel).value]
    except (KeyError, ValueError):
        raise UnknownUnhealthyLevelError(
            f"Grau de insalubridade desconhecido: {nivel!r}.", {"unhealthyLevel": str(nivel)}
        )
    return tabela.salario_minimo * aliquota


def aplicar_politica_adicionais(
    periculosidade: Decimal, insalubridade: Decimal, politica: PoliticaAdicionais
) -> Tuple[Decimal, Decimal]:
    """
    ADITIVA: paga os dois.
    MAIOR: paga só o maior; no empate fica a periculosidade.
    """
    if politica == PoliticaAdicionais.ADITIVA:
        return periculosidade, insalubridade

    if periculosidade <= 0 or insalubridade <= 0:
        return periculosidade, insalubridade
    if periculosidade >= insalubridade:
        log.debug("[Cálculo] Política MAIOR: mantida periculosidade, insalubridade zerada.")
        return periculosidade, ZERO
    log.debug("[Cálculo] Política MAIOR: mantida insalubridade, periculosidade zerada.")
    return ZERO, insalubridade


def calc_hora_extra(salario_hora: Decimal, horas: Decimal, fator: Decimal) -> Decimal:
    return salario_hora * fator * horas


# --- BENEFÍCIOS ---


def calc_vale_alimentacao(funcionario: Funcionario) -> Decimal:
    return funcionario.meal_voucher_daily * funcionario.work_days_in_month


def calc_vale_transporte(funcionario: Funcionario, tabela: TabelaAnual) -> Decimal:
    """
    Desconto do VT: o menor entre o custo do vale e 6% do salário base
    (não do bruto total).
    """
    teto = funcionario.gross_salary * tabela.teto_vale_transporte
    return arredondar(min(funcionario.transport_voucher_value, teto))


def calc_coparticipacoes(funcionario: Funcionario) -> Tuple[Decimal, Decimal, Decimal]:
    """Planos opcionais: valor fixo mensal, sem teto. Sem adesão, não desconta."""
    saude = funcionario.health_plan_value if funcionario.has_health_plan else ZERO
    odonto = funcionario.dental_plan_value if funcionario.has_dental_plan else ZERO
    academia = funcionario.gym_value if funcionario.has_gym else ZERO
    return arredondar(saude), arredondar(odonto), arredondar(academia)


# --- DESCONTOS LEGAIS ---


def calc_inss(base: Decimal, faixas: Sequence[RateBracket]) -> ResultadoINSS:
    """
    INSS progressivo: cada faixa tributa só a parcela do salário que cai nela.
    Acima do teto da última faixa não há contribuição adicional.
    """
    if base <= 0:
        return ResultadoINSS(ZERO, ZERO)

    total = Decimal("0")
    for faixa in faixas:
        if base <= faixa.lower:
            break
        limite = base if faixa.upper is None else min(base, faixa.upper)
        total += (limite - faixa.lower) * faixa.rate

    desconto = arredondar(total)
    aliquota_efetiva = arredondar(desconto / base, QUATRO_CASAS)
    log.debug(f"[Cálculo] INSS: Base R$ {base}, Calculado R$ {desconto}")
    return ResultadoINSS(desconto, aliquota_efetiva)


def selecionar_faixa(base: Decimal, faixas: Sequence[RateBracket]) -> RateBracket:
    """Acha a única faixa que contém a base. Sem faixa = tabela mal configurada."""
    for faixa in faixas:
        if faixa.contem(base):
            return faixa

    log.critical(f"Nenhuma faixa de IRRF cobre a base R$ {base}. Verifique a tabela.")
    raise RateTableError(
        f"Nenhuma faixa cobre a base de cálculo {base}.", {"base": str(base)}
    )


def calc_irrf(
    bruto: Decimal,
    inss_descontado: Decimal,
    dependentes: int,
    pensao: Decimal,
    tabela: TabelaAnual,
) -> ResultadoIRRF:
    """
    IRRF pelo método da parcela a deduzir.
    Base = Bruto - INSS - (dependentes x dedução) - pensão alimentícia, nunca negativa.
    Imposto = Base x alíquota da faixa - parcela a deduzir, nunca negativo.
    """
    # 1. Dedução total por dependentes
    deducao_dependentes = tabela.deducao_dependente * dependentes

    # 2. Base de cálculo real do IRRF
    base_calculo = max(ZERO, bruto - inss_descontado - deducao_dependentes - pensao)
    base_calculo = arredondar(base_calculo)

    # 3. Faixa única (não é progressivo como o INSS)
    faixa = selecionar_faixa(base_calculo, tabela.irrf)

    # 4. (Alíquota x Base) - Dedução
    desconto = arredondar(max(ZERO, base_calculo * faixa.rate - faixa.deduction))
    aliquota_efetiva = arredondar(desconto / bruto, QUATRO_CASAS) if bruto > 0 else ZERO

    log.debug(
        f"[Cálculo] IRRF: Base Bruta R$ {bruto}, INSS R$ {inss_descontado}, "
        f"Base Líquida R$ {base_calculo}, Calculado R$ {desconto}"
    )
    return ResultadoIRRF(desconto, aliquota_efetiva, base_calculo)


def calc_fgts(base_de_calculo_fgts: Decimal, tabela: TabelaAnual) -> Decimal:
    """Depósito de FGTS (8%). Encargo do empregador: não sai do líquido."""
    fgts_calculado = arredondar(base_de_calculo_fgts * tabela.aliquota_fgts)
    log.debug(f"[Cálculo] FGTS: Base R$ {base_de_calculo_fgts}, Calculado R$ {fgts_calculado}")
    return fgts_calculado
