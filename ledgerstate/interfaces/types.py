# ledgerstate/interfaces/types.py
# Copyright (c) 2024 Brad Edwards
# Licensed under the MIT License - see LICENSE file for details
from enum import Enum
from typing import Any, Callable, Dict, Optional, Union

StateName = str
StateLike = Union[str, Enum]
Metadata = Optional[Dict[str, Any]]

# Hook Types
GuardAction = Callable[[Any], Any]
CallbackAction = Callable[[Any], None]
