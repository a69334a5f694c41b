"""Node.js provider for npm projects described by ``package.json``."""

from typing import Dict, List, Optional

from stackplan_common import NodeDefaults
from stackplan_schema import PackageJson, Pkg

from ..app import App
from ..environment import Environment
from ..resolution import NODE_VERSION_RESOLVER
from .base import Provider

PACKAGE_JSON = "package.json"
DEFAULT_INDEX = "index.js"


class NodeProvider(Provider):
    def name(self) -> str:
        return "node"

    def detect(self, app: App, env: Environment) -> bool:
        return app.includes_file(PACKAGE_JSON)

    def pkgs(self, app: App, env: Environment) -> List[Pkg]:
        package_json = self.read_package_json(app)
        return [Pkg(name=NodeDefaults.STDENV_PKG), self.get_nix_node_pkg(package_json)]

    def install_cmd(self, app: App, env: Environment) -> Optional[str]:
        return "npm install"

    def suggested_build_cmd(self, app: App, env: Environment) -> Optional[str]:
        if self.read_package_json(app).has_script("build"):
            return "npm run build"
        return None

    def suggested_start_command(self, app: App, env: Environment) -> Optional[str]:
        """
        First rule that applies wins:

        1. ``scripts.start``           -> ``npm run start``
        2. ``main`` exists in the tree -> ``node <main>``
        3. ``index.js`` exists         -> ``node index.js``
        """
        package_json = self.read_package_json(app)
        if package_json.has_script("start"):
            return "npm run start"

        if package_json.main and app.includes_file(package_json.main):
            return f"node {package_json.main}"

        if app.includes_file(DEFAULT_INDEX):
            return f"node {DEFAULT_INDEX}"

        return None

    def get_environment_variables(self, app: App, env: Environment) -> Dict[str, str]:
        return self.get_node_environment_variables()

    @staticmethod
    def get_node_environment_variables() -> Dict[str, str]:
        return {
            "NODE_ENV": "production",
            "NPM_CONFIG_PRODUCTION": "false",
        }

    @staticmethod
    def get_nix_node_pkg(package_json: PackageJson) -> Pkg:
        """
        Node package for the ``engines.node`` constraint.

        Raises:
            UnsupportedVersionError: If the constraint names an unavailable major
        """
        return NODE_VERSION_RESOLVER.resolve(package_json.engine("node"))

    @staticmethod
    def read_package_json(app: App) -> PackageJson:
        return app.read_json(PACKAGE_JSON, PackageJson)
