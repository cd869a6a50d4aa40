# folha/calculo/repository.py

"""
Colaboradores externos do motor: cadastro de funcionários e destino dos
holerites calculados. O motor só conhece os Protocols; as versões em memória
servem para desenvolvimento e testes.
"""

import threading
from functools import lru_cache
from typing import Dict, List, Optional, Protocol, Tuple

from folha.calculo.models import CalculoFolha, Funcionario
from folha.exceptions import DuplicateEmployeeError, InputValidationError


class EmployeeLookup(Protocol):
    def get(self, employee_id: int) -> Optional[Funcionario]: ...


class PayrollSink(Protocol):
    def find(self, employee_id: int, reference_month: str) -> Optional[CalculoFolha]: ...

    def save(self, employee_id: int, calculo: CalculoFolha) -> CalculoFolha: ...

    def list_by_employee(self, employee_id: int) -> List[CalculoFolha]: ...


class InMemoryEmployeeRepository:
    def __init__(self):
        self._funcionarios: Dict[int, Funcionario] = {}
        self._lock = threading.Lock()

    def add(self, funcionario: Funcionario) -> Funcionario:
        if funcionario.id is None:
            raise InputValidationError(
                "Funcionário precisa de id para ser cadastrado.", {"funcionario": funcionario.name}
            )
        with self._lock:
            if funcionario.id in self._funcionarios:
                raise DuplicateEmployeeError(
                    f"Funcionário {funcionario.id} já cadastrado.", {"employeeId": funcionario.id}
                )
            self._funcionarios[funcionario.id] = funcionario
        return funcionario

    def get(self, employee_id: int) -> Optional[Funcionario]:
        return self._funcionarios.get(employee_id)

    def listar(self) -> List[Funcionario]:
        with self._lock:
            return sorted(self._funcionarios.values(), key=lambda f: f.id)


class InMemoryPayrollRepository:
    # Chave: (id do funcionário, competência). Escritas serializadas pelo lock.
    def __init__(self):
        self._holerites: Dict[Tuple[int, str], CalculoFolha] = {}
        self._lock = threading.Lock()

    def find(self, employee_id: int, reference_month: str) -> Optional[CalculoFolha]:
        return self._holerites.get((employee_id, reference_month))

    def save(self, employee_id: int, calculo: CalculoFolha) -> CalculoFolha:
        chave = (employee_id, calculo.reference_month)
        with self._lock:
            # Outra requisição pode ter gravado a mesma competência antes
            return self._holerites.setdefault(chave, calculo)

    def list_by_employee(self, employee_id: int) -> List[CalculoFolha]:
        with self._lock:
            itens = [c for (emp, _), c in self._holerites.items() if emp == employee_id]
        return sorted(itens, key=lambda c: c.reference_month)


# Instâncias compartilhadas pela API: o cadastro e o cálculo enxergam o mesmo repositório
@lru_cache()
def get_employee_repository() -> InMemoryEmployeeRepository:
    return InMemoryEmployeeRepository()


@lru_cache()
def get_payroll_repository() -> InMemoryPayrollRepository:
    return InMemoryPayrollRepository()
