import random
from datetime import datetime, timedelta
from pathlib import Path
import argparse

# Defaults (can be overridden via CLI)
DEFAULT_LINES_PER_FILE = 10_000
DEFAULT_FILE_COUNT = 3
DEFAULT_OUTPUT_DIR = "."

# (program, message) pool
LOG_MESSAGES = [
    ("sshd", "Accepted publickey for admin from 10.0.0.12 port 52144"),
    ("sshd", "pam_unix(sshd:session): session opened for user admin"),
    ("sshd", "Connection closed by 10.0.0.12 port 52144"),
    ("kernel", "eth0: link up, 1000 Mbps, full duplex"),
    ("kernel", "EXT4-fs (sda1): mounted filesystem with ordered data mode"),
    ("kernel", "Out of memory: Killed process 4321 (java)"),
    ("cron", "(root) CMD (/usr/local/bin/backup.sh)"),
    ("systemd", "Started Daily apt download activities."),
    ("systemd", "Stopping User Manager for UID 1000..."),
    ("nginx", "upstream timed out while reading response header"),
    ("postfix/smtpd", "connect from mail.example.com[203.0.113.5]"),
    ("dhclient", "DHCPACK of 10.0.0.15 from 10.0.0.1"),
]


def generate_log_line(timestamp: datetime, host: str) -> str:
    """Generate a single syslog-style line with given timestamp."""
    program, message = random.choice(LOG_MESSAGES)
    return f"{timestamp:%b %d %H:%M:%S} {host} {program}[{random.randint(100, 9999)}]: {message}\n"


def generate_log_file(filename: Path, host: str, start_time: datetime, num_lines: int) -> None:
    """
    Generate a log file with specified number of lines.

    Args:
        filename: Output file name
        host: Host name written in each line
        start_time: Starting datetime
        num_lines: Number of log lines to generate
    """
    current_time = start_time

    print(f"Generating {filename}...")
    with open(filename, 'w') as f:
        for _ in range(num_lines):
            # Advance time by random interval (0-10 seconds)
            current_time += timedelta(seconds=random.randint(0, 10))
            f.write(generate_log_line(current_time, host))

    print(f"  Completed: {num_lines:,} lines")


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Generate synthetic syslog files with interleaved timestamps, for merging with logsync."
    )
    parser.add_argument(
        "--lines",
        type=int,
        default=DEFAULT_LINES_PER_FILE,
        help=f"Number of lines in each generated file (default: {DEFAULT_LINES_PER_FILE}).",
    )
    parser.add_argument(
        "--files",
        type=int,
        default=DEFAULT_FILE_COUNT,
        help=f"Number of files to generate (default: {DEFAULT_FILE_COUNT}).",
    )
    parser.add_argument(
        "--output-dir",
        type=str,
        default=DEFAULT_OUTPUT_DIR,
        help="Directory where the files will be written (default: current directory).",
    )
    return parser.parse_args()


def main():
    args = parse_args()

    if args.lines <= 0 or args.files <= 0:
        raise SystemExit("--lines and --files must be positive integers")

    output_dir = Path(args.output_dir)
    output_dir.mkdir(parents=True, exist_ok=True)

    start_time = datetime(2025, 1, 1, 0, 0, 0)
    for i in range(1, args.files + 1):
        generate_log_file(output_dir / f"host{i}.log", f"host{i}", start_time, args.lines)

    print()
    print("Generation complete!")


if __name__ == "__main__":
    main()
