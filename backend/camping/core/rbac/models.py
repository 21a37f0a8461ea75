from enum import Enum

from pydantic import BaseModel


class Role(str, Enum):
    ADMIN = "ADMIN"
    USER = "USER"


class Department(str, Enum):
    RECEPCION = "Recepción"
    DIRECCION = "Dirección"
    SSTT = "Servicios Técnicos (SSTT)"
    RESTAURANTE = "Restaurante"
    LIMPIEZA = "Limpieza"


class User(BaseModel):
    """
    Registry entry. `email` is the key and is stored lower-cased;
    `password` holds a bcrypt hash, never the plain value.
    """
    name: str
    email: str
    password: str
    department: Department
    role: Role = Role.USER
