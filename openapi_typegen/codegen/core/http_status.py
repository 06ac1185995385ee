"""Case names for HTTP response status codes."""

STATUS_CODE_NAMES = {
    100: "continue",
    101: "switchingProtocols",
    103: "earlyHints",
    200: "ok",
    201: "created",
    202: "accepted",
    203: "nonAuthoritativeInformation",
    204: "noContent",
    205: "resetContent",
    206: "partialContent",
    300: "multipleChoices",
    301: "movedPermanently",
    302: "found",
    303: "seeOther",
    304: "notModified",
    307: "temporaryRedirect",
    308: "permanentRedirect",
    400: "badRequest",
    401: "unauthorized",
    403: "forbidden",
    404: "notFound",
    405: "methodNotAllowed",
    406: "notAcceptable",
    407: "proxyAuthenticationRequired",
    408: "requestTimeout",
    409: "conflict",
    410: "gone",
    411: "lengthRequired",
    412: "preconditionFailed",
    413: "contentTooLarge",
    414: "uriTooLong",
    415: "unsupportedMediaType",
    416: "rangeNotSatisfiable",
    417: "expectationFailed",
    421: "misdirectedRequest",
    422: "unprocessableContent",
    425: "tooEarly",
    426: "upgradeRequired",
    428: "preconditionRequired",
    429: "tooManyRequests",
    431: "requestHeaderFieldsTooLarge",
    451: "unavailableForLegalReasons",
    500: "internalServerError",
    501: "notImplemented",
    502: "badGateway",
    503: "serviceUnavailable",
    504: "gatewayTimeout",
    505: "httpVersionNotSupported",
    511: "networkAuthenticationRequired",
}

STATUS_RANGE_NAMES = {
    "1XX": "informational",
    "2XX": "successful",
    "3XX": "redirection",
    "4XX": "clientError",
    "5XX": "serverError",
}


def status_case_name(status: str) -> str:
    """
    Name of the response case for a ``responses`` key.

    Accepts numeric codes, ranges such as ``4XX`` and ``default``. The result
    still needs to go through the safe name generator, since some names
    (``continue``, ``default``) are keywords in common target languages.
    """
    key = str(status).strip()
    if key.lower() == "default":
        return "default"
    if key.upper() in STATUS_RANGE_NAMES:
        return STATUS_RANGE_NAMES[key.upper()]
    if key.isdigit():
        code = int(key)
        return STATUS_CODE_NAMES.get(code, f"code{code}")
    return key
