"""
Resolução de charters do Charter Assembly.

Componentes:
    - context → `ResolutionContext` (acumulação de erros, modo degradado, eventos)
    - types   → `Clan` e `ResolutionResult`
    - engine  → `ResolutionEngine` e o atalho `resolve`

Princípios fundamentais:
    - Uma passada nunca para no primeiro erro: todos os defeitos
      independentes são reportados, em ordem de descoberta
    - Nenhum founder é invocado após o primeiro erro da passada
    - Não existe sucesso parcial

Limites explícitos:
    - Não registra descritores
    - Não executa os componentes construídos
"""
