#!/usr/bin/env python3
# -*- coding: utf-8 -*-

import sys
import os
from colorama import init, Fore, Style

init(autoreset=True)

USE_COLORS = True
_DEBUG = False

def is_interactive_terminal():
    """Check whether output goes to an interactive terminal"""
    return sys.stdout.isatty() and not os.environ.get('MIMEPROXY_NO_COLOR')

def set_debug_mode(value=True):
    """
    Enable or disable debug output

    Args:
        value: True to print debug messages
    """
    global _DEBUG
    _DEBUG = bool(value)

def is_debug_mode() -> bool:
    """
    Check if debug mode is active

    Returns:
        bool: True if debug mode is active, False otherwise
    """
    return _DEBUG

def print_info(message="", **kwargs):
    print(message, **kwargs)

def print_status(message="", **kwargs):
    """Print an information message"""
    if USE_COLORS and is_interactive_terminal():
        print(f"[{Fore.BLUE}*{Style.RESET_ALL}] {message}", **kwargs)
    else:
        print(f"[*] {message}", **kwargs)

def print_error(message="", **kwargs):
    """Print an error message"""
    if USE_COLORS and is_interactive_terminal():
        print(f"[{Fore.RED}!{Style.RESET_ALL}] {message}", **kwargs)
    else:
        print(f"[!] {message}", **kwargs)

def print_success(message="", **kwargs):
    """Print a success message"""
    if USE_COLORS and is_interactive_terminal():
        print(f"[{Fore.GREEN}+{Style.RESET_ALL}] {message}", **kwargs)
    else:
        print(f"[+] {message}", **kwargs)

def print_warning(message="", **kwargs):
    """Print a warning message"""
    if USE_COLORS and is_interactive_terminal():
        print(f"[{Fore.YELLOW}~{Style.RESET_ALL}] {message}", **kwargs)
    else:
        print(f"[~] {message}", **kwargs)

def print_debug(message="", force=False, **kwargs):
    """
    Print a debug message (only if debug mode is active or force=True)

    Args:
        message: Debug message to print
        force: If True, always print regardless of debug mode
    """
    if not force and not is_debug_mode():
        return

    if USE_COLORS and is_interactive_terminal():
        print_info(f"[{Fore.MAGENTA}DEBUG{Style.RESET_ALL}] {message}", **kwargs)
    else:
        print_info(f"[DEBUG] {message}", **kwargs)

def set_use_colors(value=True):
    """Enable or disable the use of colors"""
    global USE_COLORS
    USE_COLORS = bool(value)
