from pathlib import Path


def contains_list(full_list, sub_list) -> bool:
    sub_len = len(sub_list)
    for offset in range(len(full_list) - len(sub_list) + 1):
        if full_list[offset:offset + sub_len] == sub_list:
            return True
    return False


def write_log(path: Path, lines: list[str]) -> str:
    """Write lines to path as a log file, and return the path as a str."""
    path.write_text("".join(f"{line}\n" for line in lines), encoding="utf-8")
    return str(path)
