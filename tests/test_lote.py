# tests/test_lote.py

import pandas as pd
import pytest

from folha.calculo.lote import STATUS_CALCULADO, STATUS_INVALIDO, processar_folha


# Helper para criar DataFrames de teste mais completos
def criar_df_teste(linhas: list) -> pd.DataFrame:
    colunas_padrao = {
        "id": 1,
        "name": "Teste",
        "cpf": "000.000.000-00",
        "grossSalary": 1412.0,
        "hoursPerDay": 8,
        "daysPerWeek": 5,
        "workDaysInMonth": 22,
        "unhealthyLevel": "none",
    }
    registros = []
    for dados in linhas:
        registro = dict(colunas_padrao)
        registro.update(dados)
        registros.append(registro)
    return pd.DataFrame(registros)


def test_folha_em_lote_calcula_cada_funcionario():
    # Arrange
    df_teste = criar_df_teste(
        [
            {"id": 1, "name": "Ana"},
            {"id": 2, "name": "Bruno", "grossSalary": 2000.0, "isDangerous": True},
        ]
    )
    # Act
    df_resultado = processar_folha(df_teste, "2024-05")
    # Assert
    assert list(df_resultado["Status"]) == [STATUS_CALCULADO, STATUS_CALCULADO]
    assert df_resultado.loc[0, "Liquido"] == pytest.approx(1306.10)
    assert df_resultado.loc[1, "BrutoTotal"] == pytest.approx(2600.00)
    assert df_resultado.loc[1, "INSS"] == pytest.approx(212.82)
    assert df_resultado.loc[1, "FGTS"] == pytest.approx(208.00)


def test_linha_invalida_nao_derruba_o_lote():
    # Arrange
    df_teste = criar_df_teste(
        [
            {"id": 1, "name": "Ana"},
            {"id": 2, "name": "Carlos", "hoursPerDay": 0},
            {"id": 3, "name": "Dora", "unhealthyLevel": "extreme"},
        ]
    )
    # Act
    df_resultado = processar_folha(df_teste, "2024-05")
    # Assert
    assert list(df_resultado["Status"]) == [STATUS_CALCULADO, STATUS_INVALIDO, STATUS_INVALIDO]
    assert "Jornada inválida" in df_resultado.loc[1, "Observacoes"]
    assert "insalubridade" in df_resultado.loc[2, "Observacoes"]
    assert pd.isna(df_resultado.loc[1, "Liquido"])


def test_celulas_vazias_assumem_o_padrao_do_cadastro():
    # Arrange: só o segundo funcionário tem dependentes; no primeiro a célula fica NaN
    df_teste = criar_df_teste(
        [
            {"id": 1, "name": "Ana", "grossSalary": 5000.0},
            {"id": 2, "name": "Bruno", "grossSalary": 5000.0, "dependents": 2},
        ]
    )
    # Act
    df_resultado = processar_folha(df_teste, "2024-05")
    # Assert
    assert list(df_resultado["Status"]) == [STATUS_CALCULADO, STATUS_CALCULADO]
    assert df_resultado.loc[0, "IRRF"] > df_resultado.loc[1, "IRRF"]


def test_lote_vazio():
    df_resultado = processar_folha(pd.DataFrame(), "2024-05")
    assert df_resultado.empty


def test_salario_fora_da_escala_marca_so_a_linha():
    # Arrange
    df_teste = criar_df_teste(
        [
            {"id": 1, "name": "Ana"},
            {"id": 2, "name": "Erro de Digitação", "grossSalary": 1e27},
        ]
    )
    # Act
    df_resultado = processar_folha(df_teste, "2024-05")
    # Assert
    assert list(df_resultado["Status"]) == [STATUS_CALCULADO, STATUS_INVALIDO]
    assert df_resultado.loc[0, "Liquido"] == pytest.approx(1306.10)


def test_insalubridade_vazia_e_rejeitada():
    # Arrange: célula vazia não pode virar "none" sem ninguém ver
    df_teste = criar_df_teste(
        [
            {"id": 1, "name": "Ana", "unhealthyLevel": "high"},
            {"id": 2, "name": "Bruno", "unhealthyLevel": None},
        ]
    )
    # Act
    df_resultado = processar_folha(df_teste, "2024-05")
    # Assert
    assert list(df_resultado["Status"]) == [STATUS_CALCULADO, STATUS_INVALIDO]
    assert "insalubridade" in df_resultado.loc[1, "Observacoes"]


def test_planilha_sem_coluna_de_insalubridade_assume_none():
    df_teste = criar_df_teste([{"id": 1, "name": "Ana"}]).drop(columns=["unhealthyLevel"])
    df_resultado = processar_folha(df_teste, "2024-05")
    assert df_resultado.loc[0, "Status"] == STATUS_CALCULADO
    assert df_resultado.loc[0, "Insalubridade"] == 0
