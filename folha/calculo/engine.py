# folha/calculo/engine.py

"""
Montador do holerite.

Fluxo (sempre nessa ordem, sempre do zero a cada chamada):
    snapshot do funcionário -> jornada -> proventos -> descontos legais -> holerite

Não existe estado entre chamadas: pode ser chamado de várias threads ao mesmo
tempo sem lock.
"""

from typing import Any, Mapping, Optional, Union

from folha.calculo import calculations
from folha.calculo.data_validation import validar_funcionario
from folha.calculo.models import CalculoFolha, Funcionario
from folha.calculo.regras import RegrasFolha, regras_padrao
from folha.calculo.tabelas import TabelaAnual, get_tabela
from folha.exceptions import InputValidationError, NegativeNetSalaryError
from folha.logging_config import log
from folha.shared.utils import ZERO, arredondar


def calculate_payroll(
    employee: Union[Funcionario, Mapping[str, Any]],
    reference_month: str,
    regras: Optional[RegrasFolha] = None,
    tabela: Optional[TabelaAnual] = None,
) -> CalculoFolha:
    """
    Calcula o holerite completo de um funcionário para a competência informada.

    `reference_month` é só um rótulo (ex.: "2024-05") gravado no resultado.
    Levanta InputValidationError (e filhas) para dados inválidos e RateTableError
    para tabela mal configurada. Nunca devolve resultado parcial.
    """
    if not reference_month or not str(reference_month).strip():
        raise InputValidationError(
            "Mês de referência é obrigatório.", {"referenceMonth": reference_month}
        )

    funcionario = validar_funcionario(employee)
    regras = regras or regras_padrao()
    tabela = tabela or get_tabela()

    log.info(f"[Folha] Calculando {funcionario.name} (Ref: {reference_month})...")

    # --- 1. JORNADA ---
    jornada = calculations.calc_jornada(funcionario)
    salario_hora = arredondar(jornada.salario_hora)

    # --- 2. PROVENTOS ---
    periculosidade, insalubridade = calculations.aplicar_politica_adicionais(
        calculations.calc_periculosidade(funcionario, tabela),
        calculations.calc_insalubridade(funcionario.unhealthy_level, tabela),
        regras.politica_adicionais,
    )
    periculosidade = arredondar(periculosidade)
    insalubridade = arredondar(insalubridade)

    horas_extras = funcionario.overtime_hours if funcionario.has_overtime else ZERO
    valor_hora_extra = arredondar(
        calculations.calc_hora_extra(jornada.salario_hora, horas_extras, regras.fator_hora_extra)
    )
    banco_de_horas = funcionario.time_bank_hours if funcionario.has_time_bank else ZERO

    # Benefícios: informados no holerite, não entram no bruto
    vale_transporte = arredondar(funcionario.transport_voucher_value)
    vale_alimentacao = arredondar(calculations.calc_vale_alimentacao(funcionario))

    bruto = arredondar(funcionario.gross_salary) + periculosidade + insalubridade + valor_hora_extra

    # --- 3. DESCONTOS ---
    inss = calculations.calc_inss(bruto, tabela.inss)
    irrf = calculations.calc_irrf(
        bruto,
        inss.desconto,
        funcionario.dependents,
        funcionario.pension_alimony,
        tabela,
    )
    desconto_vt = calculations.calc_vale_transporte(funcionario, tabela)
    saude, odonto, academia = calculations.calc_coparticipacoes(funcionario)

    # FGTS é do empregador: fica FORA do total de descontos
    fgts = calculations.calc_fgts(bruto, tabela)

    total_descontos = inss.desconto + irrf.desconto + desconto_vt + saude + odonto + academia

    # --- 4. LÍQUIDO ---
    liquido = bruto - total_descontos

    if liquido < 0:
        contexto = {"grossTotal": str(bruto), "totalDiscounts": str(total_descontos)}
        if not regras.permite_liquido_negativo:
            log.error(f"[Folha] {funcionario.name}: descontos maiores que o bruto. Cálculo recusado.")
            raise NegativeNetSalaryError(
                "Descontos não podem ser maiores que o salário bruto.", contexto
            )
        log.warning(f"[Folha] {funcionario.name}: salário líquido negativo (R$ {liquido}).")

    calculo = CalculoFolha(
        employee=funcionario,
        reference_month=reference_month,
        hourly_wage=salario_hora,
        weekly_hours=arredondar(jornada.horas_semanais),
        monthly_hours=arredondar(jornada.horas_mensais),
        dangerous_bonus=periculosidade,
        unhealthy_bonus=insalubridade,
        overtime_hours=arredondar(horas_extras),
        overtime_value=valor_hora_extra,
        time_bank_hours=arredondar(banco_de_horas),
        transport_voucher=vale_transporte,
        meal_voucher=vale_alimentacao,
        inss_calculation_base=bruto,
        inss_discount=inss.desconto,
        inss_effective_rate=inss.aliquota_efetiva,
        irpf_calculation_base=irrf.base_calculo,
        irpf_discount=irrf.desconto,
        irpf_effective_rate=irrf.aliquota_efetiva,
        transport_voucher_discount=desconto_vt,
        health_plan_discount=saude,
        dental_plan_discount=odonto,
        gym_discount=academia,
        total_discounts=total_descontos,
        fgts=fgts,
        gross_total=bruto,
        net_salary=liquido,
    )

    log.success(
        f"[Folha] {funcionario.name} ({reference_month}): Bruto R$ {bruto}, "
        f"Descontos R$ {total_descontos}, Líquido R$ {liquido}, FGTS R$ {fgts}"
    )
    return calculo
