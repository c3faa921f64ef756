#  Copyright (c) 2024 Astramind. Licensed under Apache License, Version 2.0.
import logging

import torch
from pydantic import BaseModel, Field


class PreFillConfig(BaseModel, arbitrary_types_allowed=True):
    """
    Settings of a BlockPreFiller.

    Attributes:
        default_dtype (torch.dtype): Format given to shape configs that leave theirs unset.
        logging_level (int): Level applied to the prefill loggers.
    """
    default_dtype: torch.dtype = torch.float32
    logging_level: int = Field(default=logging.INFO, ge=0)
