# folha/calculo/service.py

from typing import List, Optional

from folha.calculo.engine import calculate_payroll
from folha.calculo.models import CalculoFolha
from folha.calculo.regras import RegrasFolha
from folha.calculo.repository import EmployeeLookup, PayrollSink
from folha.exceptions import EmployeeNotFoundError
from folha.logging_config import log


class PayrollService:
    """Busca o funcionário, calcula (ou reaproveita) o holerite e entrega ao destino."""

    def __init__(
        self,
        employees: EmployeeLookup,
        payrolls: PayrollSink,
        regras: Optional[RegrasFolha] = None,
    ):
        self.employees = employees
        self.payrolls = payrolls
        self.regras = regras

    def calcular(self, employee_id: int, reference_month: str) -> CalculoFolha:
        # Idempotência: mesma competência já calculada devolve o holerite existente
        existente = self.payrolls.find(employee_id, reference_month)
        if existente is not None:
            log.info(f"[Folha] Holerite {employee_id}/{reference_month} já existe. Reaproveitando.")
            return existente

        funcionario = self.employees.get(employee_id)
        if funcionario is None:
            raise EmployeeNotFoundError(
                f"Funcionário {employee_id} não encontrado.", {"employeeId": employee_id}
            )

        calculo = calculate_payroll(funcionario, reference_month, regras=self.regras)
        return self.payrolls.save(employee_id, calculo)

    def historico(self, employee_id: int) -> List[CalculoFolha]:
        if self.employees.get(employee_id) is None:
            raise EmployeeNotFoundError(
                f"Funcionário {employee_id} não encontrado.", {"employeeId": employee_id}
            )
        return self.payrolls.list_by_employee(employee_id)
