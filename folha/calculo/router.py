# folha/calculo/router.py

from functools import lru_cache
from typing import Any, Dict, List

import pandas as pd
from fastapi import APIRouter, Depends, status
from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from folha.calculo import lote
from folha.calculo.engine import calculate_payroll
from folha.calculo.models import CalculoFolha
from folha.calculo.repository import get_employee_repository, get_payroll_repository
from folha.calculo.service import PayrollService
from folha.calculo.tabelas import get_tabela

router = APIRouter(prefix="/api/payroll", tags=["Folha - Cálculo"])

# Competência no formato AAAA-MM
REFERENCE_MONTH_PATTERN = r"^\d{4}-(0[1-9]|1[0-2])$"


# --- MODELOS ---


class _Request(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class PayrollCalculationRequest(_Request):
    employee_id: int = Field(ge=1)
    reference_month: str = Field(pattern=REFERENCE_MONTH_PATTERN)


# O funcionário vai como dict: a validação fica com o motor, que devolve os erros
# na nossa hierarquia (jornada inválida, insalubridade desconhecida...)
class PayrollSimulationRequest(_Request):
    employee: Dict[str, Any]
    reference_month: str = Field(pattern=REFERENCE_MONTH_PATTERN)


class PayrollBatchRequest(_Request):
    reference_month: str = Field(pattern=REFERENCE_MONTH_PATTERN)
    employees: List[Dict[str, Any]]


# --- DEPENDÊNCIAS ---


@lru_cache()
def get_payroll_service() -> PayrollService:
    return PayrollService(get_employee_repository(), get_payroll_repository())


# --- ENDPOINTS ---


@router.post("/calculate", status_code=status.HTTP_201_CREATED, response_model=CalculoFolha)
def calculate(
    request: PayrollCalculationRequest,
    service: PayrollService = Depends(get_payroll_service),
):
    """Calcula (ou devolve o já calculado) holerite de um funcionário cadastrado."""
    return service.calcular(request.employee_id, request.reference_month)


@router.post("/simulate", response_model=CalculoFolha)
def simulate(request: PayrollSimulationRequest):
    """Cálculo avulso, sem cadastro e sem gravar nada."""
    return calculate_payroll(request.employee, request.reference_month)


@router.post("/batch")
def batch(request: PayrollBatchRequest):
    df_funcionarios = pd.DataFrame(request.employees)
    df_folha = lote.processar_folha(df_funcionarios, request.reference_month)

    # NaN não é JSON válido: colunas numéricas das linhas inválidas viram null
    df_folha = df_folha.astype(object).where(df_folha.notna(), None)
    return {
        "referenceMonth": request.reference_month,
        "total": len(df_folha),
        "invalidos": int((df_folha["Status"] == lote.STATUS_INVALIDO).sum()),
        "folha": df_folha.to_dict(orient="records"),
    }


@router.get("/employees/{employee_id}/history", response_model=List[CalculoFolha])
def history(employee_id: int, service: PayrollService = Depends(get_payroll_service)):
    return service.historico(employee_id)


@router.get("/tables")
def tables():
    tabela = get_tabela()
    return {
        "ano": tabela.ano,
        "salarioMinimo": float(tabela.salario_minimo),
        "deducaoDependente": float(tabela.deducao_dependente),
        "aliquotaFgts": float(tabela.aliquota_fgts),
        "aliquotaPericulosidade": float(tabela.aliquota_periculosidade),
        "tetoValeTransporte": float(tabela.teto_vale_transporte),
        "insalubridade": {nivel: float(v) for nivel, v in tabela.insalubridade.items()},
        "inss": [
            {"de": float(f.lower), "ate": float(f.upper), "aliquota": float(f.rate)}
            for f in tabela.inss
        ],
        "irrf": [
            {
                "de": float(f.lower),
                "ate": float(f.upper) if f.upper is not None else None,
                "aliquota": float(f.rate),
                "deducao": float(f.deduction),
            }
            for f in tabela.irrf
        ],
    }
