# purchase_indexer/utils/amounts.py
"""
Utility functions for handling fixed-point token amounts
"""

from typing import Union


STABLE_COIN_DECIMALS = 6
BASE_COIN_DECIMALS = 18


def format_units(amount: Union[int, str], decimals: int) -> str:
    """
    Render a raw integer amount scaled by 10**-decimals as an exact decimal string.

    Trailing fractional zeros are dropped and whole numbers carry no
    fractional part: 123456789 with 6 decimals is "123.456789", 0 is "0".
    """
    value = int(amount)
    if decimals < 0:
        raise ValueError("decimals must not be negative")

    negative = value < 0
    whole, fraction = divmod(abs(value), 10 ** decimals)

    result = str(whole)
    if decimals:
        fraction_str = str(fraction).rjust(decimals, "0").rstrip("0")
        if fraction_str:
            result = f"{result}.{fraction_str}"

    return f"-{result}" if negative else result
