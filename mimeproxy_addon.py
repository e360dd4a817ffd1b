"""
mitmproxy script entry point:  mitmproxy -s mimeproxy_addon.py
"""

from interfaces.mimeproxy.addon import MimeCommands

addons = [MimeCommands()]
