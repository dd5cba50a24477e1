from typing import Callable, List, Tuple, Union

import numpy as np

# Type aliases for better readability
Array = np.ndarray
ArrayLike = Union[Array, List[float], List[int], Tuple[float, ...], Tuple[int, ...]]
CoefficientFn = Callable[[float], float]
