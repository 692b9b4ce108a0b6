"""
# Registry Core — Charter Assembly

Este pacote define os **descritores autodescritivos** e o **registry**
consultado pelo engine de resolução.

## Componentes

- **descriptors**
  - `FaceDescriptor`, `ImpDescriptor`, `RoleDescriptor`
  - `Founder` / `BareFounder` (Protocol)

- **registry**
  - `DescriptorRegistry`: namespaces separados de faces e imps,
    dedup-ou-conflito, ciclo de vida init/freeze

- **modules**
  - `registration_entrypoint`: entrypoints idempotentes por módulo
  - `bootstrap`: passada de inicialização + freeze

## Invariantes

- Labels são strings opacas comparadas por igualdade exata
- Após o freeze o registry é somente leitura
- Conflitos de registro são acumulados, nunca sobrescritos
"""
