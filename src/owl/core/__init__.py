"""
Core do Owl.

Este pacote contém a implementação canônica da linguagem de configuração
e de sua resolução, sem dependências de UI, subprocessos ou rede.

O core é projetado para ser:
    - determinístico
    - testável de forma isolada
    - livre de estado entre chamadas
"""
