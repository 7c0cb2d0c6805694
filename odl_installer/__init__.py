"""
OpenDaylight installer.

Installs and configures the OpenDaylight controller through a set of
desired-state components registered with ``odl_installer.registry``.
"""
