# reisimports/core/validadores.py
"""
Funções puras de normalização e validação de documentos e contatos.
"""
import re
from typing import Optional


def somente_digitos(valor: Optional[str]) -> str:
    """Remove tudo que não for dígito."""
    return re.sub(r'\D', '', valor or '')


def normalizar_cpf(cpf: Optional[str]) -> Optional[str]:
    """Retorna os 11 dígitos do CPF, ou None se não houver exatamente 11."""
    digitos = somente_digitos(cpf)
    if len(digitos) != 11:
        return None
    return digitos


def cpf_valido(cpf: Optional[str]) -> bool:
    """
    Validação completa do CPF: 11 dígitos, não todos iguais,
    e os dois dígitos verificadores conferem (módulo 11).
    """
    digitos = normalizar_cpf(cpf)
    if not digitos or digitos == digitos[0] * 11:
        return False

    for posicao in (9, 10):
        soma = sum(int(digitos[i]) * (posicao + 1 - i) for i in range(posicao))
        resto = (soma * 10) % 11
        if resto == 10:
            resto = 0
        if resto != int(digitos[posicao]):
            return False
    return True


def formatar_cpf(cpf: Optional[str]) -> str:
    """Formata como xxx.xxx.xxx-xx. Valores sem 11 dígitos são devolvidos como vieram."""
    digitos = normalizar_cpf(cpf)
    if not digitos:
        return cpf or ''
    return f"{digitos[:3]}.{digitos[3:6]}.{digitos[6:9]}-{digitos[9:]}"
