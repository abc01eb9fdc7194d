# app/shared/validators.py
"""Validaciones de datos argentinos usadas por los esquemas del catálogo"""
import re
from typing import Optional

CUIT_MULTIPLIERS = (5, 4, 3, 2, 7, 6, 5, 4, 3, 2)


def clean_digits(value: str) -> str:
    return re.sub(r"[\s\-\(\)\+]", "", value)


def is_valid_phone(phone: Optional[str]) -> bool:
    """10 dígitos (número local) o 12 comenzando con 54"""
    if not phone:
        return False

    digits = clean_digits(phone)
    if not digits.isdigit():
        return False
    return len(digits) == 10 or (digits.startswith("54") and len(digits) == 12)


def is_valid_cuit(cuit: Optional[str]) -> bool:
    """CUIT de 11 dígitos con dígito verificador módulo 11"""
    if not cuit:
        return False

    digits = re.sub(r"[\s\-]", "", cuit)
    if not re.fullmatch(r"\d{11}", digits):
        return False

    total = sum(int(d) * m for d, m in zip(digits[:10], CUIT_MULTIPLIERS))
    remainder = total % 11
    check_digit = remainder if remainder < 2 else 11 - remainder
    return int(digits[10]) == check_digit


class CommonValidators:
    @staticmethod
    def validate_non_empty_string(v):
        if not v or not v.strip():
            raise ValueError('Este campo no puede estar vacío')
        return v.strip()

    @staticmethod
    def validate_product_code(v):
        if not v or len(v.strip()) < 3:
            raise ValueError('El código debe tener al menos 3 caracteres')
        return v.strip().upper()

    @staticmethod
    def normalize_optional_string(v):
        if v is None:
            return None
        v = v.strip()
        return v or None
