"""
Core do Charter Assembly.

Este pacote contém a implementação canônica e independente de adapters
do Charter Assembly: montagem de árvores de componentes a partir de
charters declarativos, com verificação de compatibilidade de interfaces.

O core é projetado para ser:
    - determinístico
    - testável de forma isolada
    - livre de dependências de UI ou notebooks
    - orientado a descritores explícitos

Componentes principais:
    - config       → carregamento, merge e hashing de configuração; `EngineSettings`
    - registry     → descritores de face/imp/role, registry e bootstrap
    - charter      → modelo, validação de forma, loader e hashing de charters
    - resolution   → contexto de erros, engine recursivo e tipos de resultado
    - traceability → `ResolutionReport` para auditoria de passadas

Princípios fundamentais:
    - Erros de configuração são dados acumulados, não exceções
    - O registry é mutável apenas na inicialização e somente leitura depois
    - Estado de cada passada é isolado no seu próprio contexto

Limites explícitos:
    - Não define faces/imps concretos de aplicação
    - Não define semântica de execução dos componentes montados
    - Não depende de notebooks, CLI ou serviços externos
"""
