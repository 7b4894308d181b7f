from .base import Objective
from .vw import CrossValidationObjective, VwRunner
