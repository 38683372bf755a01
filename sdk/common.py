FUNC_DEPLOY = "deploy"
EMPTY_RESULT = "0x"
DEFAULT_BLOCK = "latest"


class SDKError(Exception):
    pass
