from typing import List, Tuple

import hypothesis.strategies

from ._complex_numbers import complex_numbers


@hypothesis.strategies.composite
def poles(
    draw: hypothesis.strategies.DrawFn,
    min_size: int = 0,
    max_size: int = 4,
    allow_infinite: bool = True,
    real_range: Tuple[float, float] = (-5.0, 5.0),
    imag_range: Tuple[float, float] = (-5.0, 5.0),
) -> List[complex]:
    """Strategy for lists of requested poles, finite or infinite."""
    finite = complex_numbers(real_range=real_range, imag_range=imag_range)
    if allow_infinite:
        element = hypothesis.strategies.one_of(
            finite,
            hypothesis.strategies.just(complex(float("inf"), 0.0)),
        )
    else:
        element = finite
    return draw(
        hypothesis.strategies.lists(
            element, min_size=min_size, max_size=max_size
        )
    )
