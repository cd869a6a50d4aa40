# tests/test_cadastro.py

import pytest
from fastapi.testclient import TestClient

from folha.api import app
from folha.calculo.repository import get_employee_repository, get_payroll_repository
from folha.calculo.router import get_payroll_service

FUNCIONARIO = {
    "id": 10,
    "name": "Carla",
    "cpf": "987.654.321-00",
    "grossSalary": 2000.00,
    "hoursPerDay": 8,
    "daysPerWeek": 5,
    "workDaysInMonth": 22,
    "isDangerous": True,
    "unhealthyLevel": "none",
}


def _limpar_caches():
    get_employee_repository.cache_clear()
    get_payroll_repository.cache_clear()
    get_payroll_service.cache_clear()


@pytest.fixture
def client():
    # Sem dependency_overrides: usa os repositórios da própria aplicação
    _limpar_caches()
    yield TestClient(app)
    _limpar_caches()


def test_cadastra_e_calcula_pela_api(client):
    # Arrange
    cadastro = client.post("/api/employees", json=FUNCIONARIO)
    # Act
    response = client.post(
        "/api/payroll/calculate", json={"employeeId": 10, "referenceMonth": "2024-05"}
    )
    historico = client.get("/api/payroll/employees/10/history")
    # Assert
    assert cadastro.status_code == 201
    assert cadastro.json()["grossSalary"] == pytest.approx(2000.00)
    assert response.status_code == 201
    assert response.json()["grossTotal"] == pytest.approx(2600.00)
    assert [h["referenceMonth"] for h in historico.json()] == ["2024-05"]


def test_consulta_funcionario_cadastrado(client):
    client.post("/api/employees", json=FUNCIONARIO)

    response = client.get("/api/employees/10")
    lista = client.get("/api/employees")

    assert response.status_code == 200
    assert response.json()["name"] == "Carla"
    assert [f["id"] for f in lista.json()] == [10]


def test_funcionario_inexistente_responde_404(client):
    response = client.get("/api/employees/999")
    assert response.status_code == 404
    assert response.json()["error"] == "EmployeeNotFoundError"


def test_id_repetido_responde_409(client):
    client.post("/api/employees", json=FUNCIONARIO)

    response = client.post("/api/employees", json={**FUNCIONARIO, "name": "Outra"})

    assert response.status_code == 409
    assert client.get("/api/employees/10").json()["name"] == "Carla"


def test_cadastro_sem_id_responde_400(client):
    sem_id = {k: v for k, v in FUNCIONARIO.items() if k != "id"}
    response = client.post("/api/employees", json=sem_id)
    assert response.status_code == 400


def test_cadastro_com_salario_fora_da_escala_responde_400(client):
    response = client.post("/api/employees", json={**FUNCIONARIO, "grossSalary": "1e27"})
    assert response.status_code == 400
    assert response.json()["error"] == "InputValidationError"
