from .arguments import (
    parse_areas_arg,
    parse_datasets_arg,
    parse_measures_arg,
    parse_years_arg,
    split_list_arg,
)
from .datasets import AREAS, DATASETS, InputFileSource, get_dataset
from .loader import DEFAULT_CONFIG, DatasetConfig, config_from_dict, load_datasets_config

__all__ = [
    "AREAS",
    "DATASETS",
    "DEFAULT_CONFIG",
    "DatasetConfig",
    "InputFileSource",
    "config_from_dict",
    "get_dataset",
    "load_datasets_config",
    "parse_areas_arg",
    "parse_datasets_arg",
    "parse_measures_arg",
    "parse_years_arg",
    "split_list_arg",
]
