"""
Utility functions for safe console output on terminals without UTF-8 support
"""


def safe_print(msg):
    """
    Print to console with fallback for unicode encoding errors.
    Card labels carry suit symbols that latin-1 consoles cannot encode.
    """
    try:
        print(msg)
    except UnicodeEncodeError:
        # Fallback: replace non-ASCII characters with '?'
        safe_msg = msg.encode('ascii', errors='replace').decode('ascii')
        print(safe_msg)


def format_money(amount):
    if amount is None:
        return "-"
    return f"${amount:,.2f}"
