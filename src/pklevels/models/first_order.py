# src/pklevels/models/first_order.py


def decay_fraction(half_life_hours: float, hours_elapsed: float) -> float:
    """
    First-order (exponential) elimination of a single dose.

    Returns the percentage of the dose still active after hours_elapsed:
      P(t) = 100 * 0.5 ** (t / t_half)

    Parameters:
      half_life_hours : elimination half-life (h)
      hours_elapsed   : time since the dose (h)

    A non-positive half-life or a negative elapsed time (dose in the future)
    gives 0.0 instead of a value.
    """
    if half_life_hours <= 0 or hours_elapsed < 0:
        return 0.0
    return 100.0 * 0.5 ** (hours_elapsed / half_life_hours)
