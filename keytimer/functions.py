DEFAULT_STACK = "0000"

MAX_MINUTES = 59
MAX_SECONDS = 59


# -----------------------------
# Display
# -----------------------------
def format_time(seconds: int) -> str:
    mins = seconds // 60
    secs = seconds % 60
    return f"{mins:02d}:{secs:02d}"


def calculate_progress_ratio(total_seconds: int, time_left: int) -> float:
    """Stroke-offset ratio for the progress ring.

    1 means nothing drawn (not started), 0 means the ring is complete.
    """
    if total_seconds <= 0:
        return 1

    progress = (total_seconds - time_left) / total_seconds
    return 1 - progress


# -----------------------------
# Digit entry
# -----------------------------
def process_number_input(stack: str, digit: int) -> str:
    # four real digits already typed: start a fresh entry
    if stack != DEFAULT_STACK and len(stack.lstrip("0")) >= 4:
        return "000" + str(digit)

    return stack[1:] + str(digit)


def convert_stack_to_time(stack: str) -> tuple[int, int]:
    raw_minutes = int(stack[0:2])
    raw_seconds = int(stack[2:4])

    # saturate, never wrap
    minutes = MAX_MINUTES if raw_minutes >= 60 else raw_minutes
    seconds = MAX_SECONDS if raw_seconds >= 60 else raw_seconds
    return minutes, seconds
