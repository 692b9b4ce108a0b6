"""Módulos de exemplo (faces/imps) usados pelos testes."""
