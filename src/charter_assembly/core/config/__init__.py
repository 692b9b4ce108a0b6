"""
Camada de configuração do Charter Assembly.

Este pacote contém os utilitários responsáveis por carregar, mesclar,
identificar e materializar a configuração do engine de resolução.

Responsabilidades do pacote:
    - Carregamento de arquivos de configuração (defaults + overrides locais)
    - Resolução de configuração final via deep-merge determinístico
    - Geração de hash canônico para rastreabilidade
    - Materialização da seção `engine` em `EngineSettings`

Limites explícitos:
    - Não carrega charters (ver `core.charter.loader`)
    - Não interage com o registry nem executa resoluções
"""
