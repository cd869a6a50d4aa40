# tests/test_router.py

import pytest
from fastapi.testclient import TestClient

from folha.api import app
from folha.calculo.models import Funcionario
from folha.calculo.repository import InMemoryEmployeeRepository, InMemoryPayrollRepository
from folha.calculo.router import get_payroll_service
from folha.calculo.service import PayrollService

FUNCIONARIO = {
    "id": 1,
    "name": "Ana",
    "cpf": "123.456.789-00",
    "grossSalary": 1412.00,
    "hoursPerDay": 8,
    "daysPerWeek": 5,
    "workDaysInMonth": 22,
    "unhealthyLevel": "none",
}


@pytest.fixture
def client():
    funcionarios = InMemoryEmployeeRepository()
    funcionarios.add(Funcionario.model_validate(FUNCIONARIO))
    service = PayrollService(funcionarios, InMemoryPayrollRepository())

    app.dependency_overrides[get_payroll_service] = lambda: service
    yield TestClient(app)
    app.dependency_overrides.clear()


def test_health(client):
    response = client.get("/health")
    assert response.status_code == 200
    assert response.json()["status"] == "ok"


def test_calcula_funcionario_cadastrado(client):
    response = client.post(
        "/api/payroll/calculate", json={"employeeId": 1, "referenceMonth": "2024-05"}
    )

    assert response.status_code == 201
    corpo = response.json()
    assert corpo["referenceMonth"] == "2024-05"
    assert corpo["inssDiscount"] == pytest.approx(105.90)
    assert corpo["netSalary"] == pytest.approx(1306.10)
    assert corpo["fgts"] == pytest.approx(112.96)


def test_funcionario_nao_cadastrado_responde_404(client):
    response = client.post(
        "/api/payroll/calculate", json={"employeeId": 42, "referenceMonth": "2024-05"}
    )

    assert response.status_code == 404
    corpo = response.json()
    assert corpo["error"] == "EmployeeNotFoundError"
    assert corpo["path"] == "/api/payroll/calculate"
    assert corpo["details"] == {"employeeId": 42}


def test_competencia_mal_formatada_responde_422(client):
    response = client.post(
        "/api/payroll/calculate", json={"employeeId": 1, "referenceMonth": "2024-13"}
    )
    assert response.status_code == 422


def test_simulacao_sem_cadastro(client):
    response = client.post(
        "/api/payroll/simulate",
        json={
            "referenceMonth": "2024-05",
            "employee": {**FUNCIONARIO, "grossSalary": 2000, "isDangerous": True},
        },
    )

    assert response.status_code == 200
    corpo = response.json()
    assert corpo["grossTotal"] == pytest.approx(2600.00)
    assert corpo["inssDiscount"] == pytest.approx(212.82)
    assert corpo["irpfDiscount"] == pytest.approx(9.60)


def test_simulacao_com_jornada_zerada_responde_400(client):
    response = client.post(
        "/api/payroll/simulate",
        json={"referenceMonth": "2024-05", "employee": {**FUNCIONARIO, "hoursPerDay": 0}},
    )

    assert response.status_code == 400
    corpo = response.json()
    assert corpo["error"] == "DegenerateScheduleError"
    assert corpo["details"]["erros"][0]["campo"] == "hours_per_day"


def test_folha_em_lote(client):
    response = client.post(
        "/api/payroll/batch",
        json={
            "referenceMonth": "2024-05",
            "employees": [
                FUNCIONARIO,
                {**FUNCIONARIO, "id": 2, "name": "Bruno", "unhealthyLevel": "extreme"},
            ],
        },
    )

    assert response.status_code == 200
    corpo = response.json()
    assert corpo["total"] == 2
    assert corpo["invalidos"] == 1
    assert corpo["folha"][0]["Liquido"] == pytest.approx(1306.10)
    assert corpo["folha"][1]["Status"] == "Inválido"
    assert corpo["folha"][1]["Liquido"] is None


def test_historico(client):
    client.post("/api/payroll/calculate", json={"employeeId": 1, "referenceMonth": "2024-05"})

    response = client.get("/api/payroll/employees/1/history")

    assert response.status_code == 200
    assert [h["referenceMonth"] for h in response.json()] == ["2024-05"]


def test_tabelas_vigentes(client):
    response = client.get("/api/payroll/tables")

    assert response.status_code == 200
    corpo = response.json()
    assert corpo["ano"] == 2024
    assert corpo["inss"][-1]["ate"] == pytest.approx(7786.02)
    assert corpo["irrf"][-1]["ate"] is None
