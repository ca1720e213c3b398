"""
Hash de passwords.

Usa los helpers de werkzeug (PBKDF2-SHA256 con salt). Formato almacenado:
    pbkdf2:sha256:<iteraciones>$<salt>$<hash hex>
"""

from typing import Optional

from werkzeug.security import check_password_hash, generate_password_hash

from safr.config import get_settings


def hash_password(password: str, iterations: Optional[int] = None) -> str:
    """Genera el hash a guardar para `password`."""
    iterations = iterations or get_settings().password_hash_iterations
    return generate_password_hash(password, method=f"pbkdf2:sha256:{iterations}")


def verify_password(password: str, stored_hash: str) -> bool:
    """Compara `password` contra un hash guardado; un hash corrupto no valida."""
    try:
        return check_password_hash(stored_hash, password)
    except (ValueError, TypeError):
        return False
