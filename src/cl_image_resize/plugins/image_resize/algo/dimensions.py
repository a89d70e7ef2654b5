"""Pure output-size computation (no I/O)."""

from ....common.schemas import OutputDimensions


def calculate_new_dimensions(
    current_width: int,
    current_height: int,
    desired_width: int,
    desired_height: int,
) -> OutputDimensions:
    """
    Compute output dimensions for a resize.

    If only one desired dimension is given (the other is 0), the other side
    is scaled to keep the source aspect ratio. The scaled side is truncated
    toward zero, not rounded, so very small ratios can produce 0.

    If both are given they are used as-is and the aspect ratio is not kept.

    Args:
        current_width: Source width in pixels (> 0)
        current_height: Source height in pixels (> 0)
        desired_width: Requested width, 0 for unspecified
        desired_height: Requested height, 0 for unspecified

    Returns:
        OutputDimensions
    """
    if desired_width == 0:
        new_width = int(desired_height / current_height * current_width)
        return OutputDimensions(width=new_width, height=desired_height)

    if desired_height == 0:
        new_height = int(desired_width / current_width * current_height)
        return OutputDimensions(width=desired_width, height=new_height)

    return OutputDimensions(width=desired_width, height=desired_height)
