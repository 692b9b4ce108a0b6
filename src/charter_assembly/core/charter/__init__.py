"""
Modelo de charter do Charter Assembly.

Este pacote define a forma da entrada de configuração consumida pelo
engine de resolução: o charter, uma árvore de valores JSON.

Componentes:
    - model   → `Charter`, `parse_charter`, `validate_charter_tree`
    - loader  → `load_charter` (YAML/JSON)
    - hashing → `compute_charter_hash` para rastreabilidade
    - errors  → hierarquia `CharterError` (inclui `MalformedCharterError`)

Limites explícitos:
    - Não consulta o registry
    - Não invoca founders
    - Nunca inspeciona o conteúdo de `data`
"""
