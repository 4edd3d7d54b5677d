"""Fixed coordinates and property keys."""

DEFAULT_AGENT_GROUP_ID = "org.mockito"
DEFAULT_AGENT_ARTIFACT_ID = "mockito-core"

# mockito-core ships a usable agent from this version on
AGENT_THRESHOLD_VERSION = "5.14.0"
FALLBACK_AGENT_GROUP_ID = "net.bytebuddy"
FALLBACK_AGENT_ARTIFACT_ID = "byte-buddy-agent"

TYCHO_SUREFIRE_GROUP_ID = "org.eclipse.tycho"
TYCHO_SUREFIRE_ARTIFACT_ID = "tycho-surefire-plugin"
TYCHO_ARGLINE_PROPERTY = "tycho.testArgLine"
SUREFIRE_ARGLINE_PROPERTY = "argLine"
