from .process import VwRunner, ProcessOutcome, parse_average_loss
from .folds import Fold, KFoldSplitter, fold_assignments, partition
from .params import ParamTemplate
from .cross_validation import CrossValidationObjective
