"""
Pacote de rastreabilidade (traceability) do Charter Assembly.

Responsabilidades principais:
    - Consolidar o resultado de uma passada em um `ResolutionReport`
    - Identificar entradas por hash semântico (charter e settings)
    - Persistir e restaurar o relatório de forma determinística (JSON)

API pública exposta:
    - ResolutionReport → estrutura canônica do relatório
    - build_report     → criação explícita a partir de um `ResolutionResult`
    - save_report      → persistência em JSON
    - load_report      → restauração determinística

Limites explícitos:
    - Não executa resolução
    - Não serializa os valores construídos pelos founders, apenas labels
"""

from .report import (
    ResolutionReport,
    build_report,
    save_report,
    load_report,
)

__all__ = [
    "ResolutionReport",
    "build_report",
    "save_report",
    "load_report",
]
