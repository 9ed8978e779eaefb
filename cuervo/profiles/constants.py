# cuervo/profiles/constants.py
from enum import Enum


class BloodType(str, Enum):
    O_POS = "O+"
    O_NEG = "O-"
    A_POS = "A+"
    A_NEG = "A-"
    B_POS = "B+"
    B_NEG = "B-"
    AB_POS = "AB+"
    AB_NEG = "AB-"


class IdType(str, Enum):
    CC = "CC"    # cédula de ciudadanía
    TI = "TI"    # tarjeta de identidad
    CE = "CE"    # cédula de extranjería
    PAS = "PAS"  # pasaporte


# Plantilla del formulario vacío (lo que manda el front al crear un perfil)
INITIAL_PROFILE_DATA = {
    "full_name": "",
    "rh": "",
    "id_type": "",
    "id_number": "",
    "health_insurance": "",
    "health_insurance_number": "",
    "extra_info": "",
    "emergency_name": "",
    "emergency_contact": "",
    "emergency_relationship": "",
}
