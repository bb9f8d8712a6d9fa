from .common import copy_containers, trim_value, trim_values
