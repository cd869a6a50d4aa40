# folha/calculo/lote.py

"""
Folha em lote: recebe a planilha de funcionários (DataFrame) e devolve a folha
analítica, uma linha por funcionário.

Linha com dado inválido não derruba o lote: é marcada como "Inválido" com o
motivo em Observacoes. Tabela mal configurada derruba (erro de configuração).
"""

from typing import Optional

import pandas as pd

from folha.calculo.data_validation import limpar_registro
from folha.calculo.engine import calculate_payroll
from folha.calculo.regras import RegrasFolha, regras_padrao
from folha.calculo.tabelas import TabelaAnual, get_tabela
from folha.exceptions import InputValidationError
from folha.logging_config import log

STATUS_CALCULADO = "Calculado"
STATUS_INVALIDO = "Inválido"

COLUNAS_FOLHA = [
    "Matricula",
    "Nome",
    "Competencia",
    "Status",
    "Observacoes",
    "SalarioBase",
    "Periculosidade",
    "Insalubridade",
    "HoraExtra",
    "BrutoTotal",
    "INSS",
    "IRRF",
    "DescontoVT",
    "Coparticipacoes",
    "TotalDescontos",
    "Liquido",
    "FGTS",
    "ValeAlimentacao",
]


def processar_folha(
    df: pd.DataFrame,
    reference_month: str,
    regras: Optional[RegrasFolha] = None,
    tabela: Optional[TabelaAnual] = None,
) -> pd.DataFrame:
    log.info(f"Iniciando processamento da folha em lote ({len(df)} funcionários, Ref: {reference_month})...")

    # Resolve uma vez só para o lote inteiro
    regras = regras or regras_padrao()
    tabela = tabela or get_tabela()

    linhas = []
    for registro in df.to_dict(orient="records"):
        dados = limpar_registro(registro)
        linha = {
            "Matricula": dados.get("id"),
            "Nome": dados.get("name", "N/A"),
            "Competencia": reference_month,
        }

        try:
            calculo = calculate_payroll(dados, reference_month, regras=regras, tabela=tabela)
        except InputValidationError as e:
            log.error(f"Funcionário {linha['Nome']} fora da folha: {e.message}")
            linha["Status"] = STATUS_INVALIDO
            linha["Observacoes"] = e.message
            linhas.append(linha)
            continue

        coparticipacoes = (
            calculo.health_plan_discount + calculo.dental_plan_discount + calculo.gym_discount
        )
        linha.update(
            {
                "Status": STATUS_CALCULADO,
                "Observacoes": "",
                "SalarioBase": float(calculo.employee.gross_salary),
                "Periculosidade": float(calculo.dangerous_bonus),
                "Insalubridade": float(calculo.unhealthy_bonus),
                "HoraExtra": float(calculo.overtime_value),
                "BrutoTotal": float(calculo.gross_total),
                "INSS": float(calculo.inss_discount),
                "IRRF": float(calculo.irpf_discount),
                "DescontoVT": float(calculo.transport_voucher_discount),
                "Coparticipacoes": float(coparticipacoes),
                "TotalDescontos": float(calculo.total_discounts),
                "Liquido": float(calculo.net_salary),
                "FGTS": float(calculo.fgts),
                "ValeAlimentacao": float(calculo.meal_voucher),
            }
        )
        linhas.append(linha)

    folha_df = pd.DataFrame(linhas, columns=COLUNAS_FOLHA)

    invalidos = int((folha_df["Status"] == STATUS_INVALIDO).sum())
    log.success(
        f"Folha em lote concluída: {len(folha_df) - invalidos} calculados, {invalidos} inválidos."
    )
    return folha_df
