from .schema import SearchConfig, CrossValidationConfig
