# folha/cadastro/router.py

from typing import Any, Dict, List

from fastapi import APIRouter, Depends, status

from folha.calculo.data_validation import validar_funcionario
from folha.calculo.models import Funcionario
from folha.calculo.repository import InMemoryEmployeeRepository, get_employee_repository
from folha.exceptions import EmployeeNotFoundError
from folha.logging_config import log

router = APIRouter(prefix="/api/employees", tags=["Cadastro - Funcionários"])


@router.post("", status_code=status.HTTP_201_CREATED, response_model=Funcionario)
def create_employee(
    payload: Dict[str, Any],
    repo: InMemoryEmployeeRepository = Depends(get_employee_repository),
):
    """Cadastra o funcionário que depois é usado em /api/payroll/calculate."""
    # Validação pelo motor: erro volta na hierarquia da folha (400), não como 422
    funcionario = repo.add(validar_funcionario(payload))
    log.info(f"[Cadastro] Funcionário {funcionario.id} - {funcionario.name} cadastrado.")
    return funcionario


@router.get("", response_model=List[Funcionario])
def list_employees(repo: InMemoryEmployeeRepository = Depends(get_employee_repository)):
    return repo.listar()


@router.get("/{employee_id}", response_model=Funcionario)
def get_employee(
    employee_id: int, repo: InMemoryEmployeeRepository = Depends(get_employee_repository)
):
    funcionario = repo.get(employee_id)
    if funcionario is None:
        raise EmployeeNotFoundError(
            f"Funcionário {employee_id} não encontrado.", {"employeeId": employee_id}
        )
    return funcionario
