from __future__ import annotations
from typing import Tuple
from pydantic import BaseModel, ConfigDict, NonNegativeInt


class Solution(BaseModel):
    model_config = ConfigDict(frozen=True)

    instance_name: str = ""
    # depot is implicit at both ends of every route and never listed
    routes: Tuple[Tuple[NonNegativeInt, ...], ...] = ()
