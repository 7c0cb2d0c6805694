"""
Component modules. Importing this package registers every component with
the ComponentRegistry.
"""

from odl_installer.components.account import account_installer  # noqa: F401
from odl_installer.components.archive import archive_installer  # noqa: F401
from odl_installer.components.credentials import (  # noqa: F401
    credentials_configurator,
)
from odl_installer.components.java import java_installer  # noqa: F401
from odl_installer.components.karaf_features import (  # noqa: F401
    karaf_features_configurator,
)
from odl_installer.components.l3_forwarding import l3_configurator  # noqa: F401
from odl_installer.components.log_levels import (  # noqa: F401
    log_level_configurator,
)
from odl_installer.components.package import package_installer  # noqa: F401
from odl_installer.components.repository import (  # noqa: F401
    repository_installer,
)
from odl_installer.components.rest_port import (  # noqa: F401
    rest_port_configurator,
)
from odl_installer.components.service import service_configurator  # noqa: F401
from odl_installer.components.service_unit import (  # noqa: F401
    service_unit_installer,
)
