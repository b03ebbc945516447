"""
Trochia: Perturbed Keplerian Orbit Propagation

A Python package for propagating satellite orbits under two-body motion
plus optional lunar, solar, J2, atmospheric drag and solar radiation
pressure perturbations, numerically stable at large time compression.
"""

# Configuration
from .config import config, temp_config

# Core classes
from .orbital_elements import OrbitalElements, OrbitalElements as OE, AccumulatedDrift
from .system import System, BodyParams, SpacecraftParams
from .satellite import Satellite, Satellite as Sat
from .environment import (EnvironmentSnapshot, EnvironmentProvider,
                          CircularEphemeris, StaticEnvironment)
from .stepping import StepPolicy
from .trail import Trail
from .simulation import Simulation

# Perturbation models
from .perturbations import Perturbation, PerturbationType
from .third_body import LunarPerturbation, SolarPerturbation
from .oblateness import J2Perturbation
from .drag import AtmosphericDrag, ExponentialDensity, EnhancedDensity
from .radiation import RadiationPressure, ShadowType, ShadowCondition
from .kepler import KeplerConvergenceWarning

# Commonly-used celestial bodies
from .defaults import EARTH, MOON, MARS, SUN, CELESTIAL_BODIES, get_body

# Package metadata
__version__ = "0.1.0"

# Define what gets imported with "from trochia import *"
__all__ = [
    # Configuration
    "config",
    "temp_config",
    # Classes
    "OrbitalElements",
    "AccumulatedDrift",
    "System",
    "BodyParams",
    "SpacecraftParams",
    "Satellite",
    "EnvironmentSnapshot",
    "EnvironmentProvider",
    "CircularEphemeris",
    "StaticEnvironment",
    "StepPolicy",
    "Trail",
    "Simulation",
    "Perturbation",
    "PerturbationType",
    "LunarPerturbation",
    "SolarPerturbation",
    "J2Perturbation",
    "AtmosphericDrag",
    "ExponentialDensity",
    "EnhancedDensity",
    "RadiationPressure",
    "ShadowType",
    "ShadowCondition",
    "KeplerConvergenceWarning",
    # Abbreviations
    "OE",
    "Sat",
    # Constants
    "EARTH",
    "MOON",
    "MARS",
    "SUN",
    "CELESTIAL_BODIES",
    "get_body",
]
