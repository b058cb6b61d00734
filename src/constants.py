"""Constants used in the project."""


class Constants:  # pylint: disable=too-few-public-methods
    """General constants used in the project.
    Data holder for configuration constants; not intended to provide behavior.
    """

    LOG_FORMAT = "[%(levelname)s] %(message)s"
    ENV_LOG_LEVEL = "SKEVER_LOG_LEVEL"
    ENV_LOG_FORMAT = "SKEVER_LOG_FORMAT"
    DEFAULT_LOG_LEVEL = "WARNING"
    LOG_FORMATS = ["human", "json"]

    # Provider options payload keys
    KEY_KUBERNETES_VERSIONS = "kubernetesVersions"
    KEY_MACHINE_IMAGES = "machineImages"
    KEY_NAME = "name"
    KEY_VERSION = "version"
    KEY_VERSIONS = "versions"
    KEY_STATE = "state"

    # User-facing warnings
    WARN_DEPRECATED_KUBERNETES = "Version {version} of Kubernetes is deprecated, please update it"
    WARN_DEPRECATED_MACHINE_IMAGES = (
        "The following versions of machines are deprecated, please update them: [{versions}]"
    )
    WARN_PREVIEW_SELECTED = "only the preview version {version!r} matched the selection criteria"
