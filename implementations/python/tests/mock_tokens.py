"""Sample UCAN 1.0 tokens shared by the test modules.

DELEGATION and INVOCATION are mock tokens signed locally with throwaway
did:key identities.  CORRUPT_DELEGATION is a delegation with a damaged
payload: it no longer decodes, but its type tag is still readable.
"""

DELEGATION = (
    "glhAl+su1rDv0DwO2TDa4Rd7rY2gV5dT1UPSYpYFXps0GuG2ofyOlsE1fX9Oa9lE"
    "tSRWoRYOUNEtw8KsDEuPSKOAB6JhaEg0Ae0B7QETcXN1Y2FuL2RsZ0AxLjAuMC1y"
    "Yy4xqWNhdWR4OGRpZDprZXk6ejZNa2ZzN0JlcUV4dnIzVmhINko5eUQzY1NQeWY1"
    "VWcxRk5lbzVaV04xYk5HTG5RY2NtZGsvZGVidWcvZWNob2NleHAaaUwlLGNpc3N4"
    "OGRpZDprZXk6ejZNa3dDb2l5SDJZSnkzNlNuSkpFc0cyalpzeGduVmpaWjdUeFhV"
    "TXhYNDhuYTh2Y25iZhppTCKYY3BvbIBjc3VieDhkaWQ6a2V5Ono2TWtmczdCZXFF"
    "eHZyM1ZoSDZKOXlEM2NTUHlmNVVnMUZOZW81WldOMWJOR0xuUWRtZXRhoWRub3Rl"
    "eDNNb2NrIGRlbGVnYXRpb24gZ2VuZXJhdGVkIGxvY2FsbHkgYnkgVUNBTiBJbnNw"
    "ZWN0b3Jlbm9uY2VMAB+tTd0GE06W7VSy"
)

INVOCATION = (
    "glhAP52kjaBWs/tYnylDmmxc/8xPf5Oc/23+syoM9s/nFQx7wEZtmsJgwG3O8val"
    "9HXWLgIHL2cx7qTpzvic6aAiBaJhaEg0Ae0B7QETcXN1Y2FuL2ludkAxLjAuMC1y"
    "Yy4xqmNhdWR4OGRpZDprZXk6ejZNa3JDYnJCQkdZdGhxQmhRdk5ieVhaMlU2d3RX"
    "eVJXdXJ2bTh4Q1czQXh2TUFwY2NtZGsvZGVidWcvZWNob2NleHAaaUwk72Npc3N4"
    "OGRpZDprZXk6ejZNa3RjUGNRbm5MQnhCY3g5d21LSEY5SkVicFRiZFRFQkdzMndR"
    "YXFtRnVUZ0ZrY25iZhppTCOlY3ByZoHYKlglAAFxEiBwVHJmFIXtrlRUv1HYlHSz"
    "BojvlEJx4GW6w+05xYf11GNzdWJ4OGRpZDprZXk6ejZNa3RjUGNRbm5MQnhCY3g5"
    "d21LSEY5SkVicFRiZFRFQkdzMndRYXFtRnVUZ0ZrZGFyZ3OiZ21lc3NhZ2V4GUhl"
    "bGxvIGZyb20gVUNBTiBJbnNwZWN0b3JpcmVxdWVzdElkam1vY2stZGVidWdkbWV0"
    "YaFndHJhY2VJZG9tb2NrLWludm9jYXRpb25lbm9uY2VQAQIDBAUGBwgJCgsMDQ4P"
    "EA=="
)

DELEGATION_ALT = (
    "glhA/ynNOVcvmCF24rmT4ZYSVVKiWmeWvOr8RTP7amuL/iyu14oi9HN1RlNkJEsh"
    "YSVVqTh8YdIqbwZVFcCTU8v4BaJhaEg0Ae0B7QETcXN1Y2FuL2RsZ0AxLjAuMC1y"
    "Yy4xqWNhdWR4OGRpZDprZXk6ejZNa3ViQ1ZZaFJjcUg0QkR0UDEzendWRTFTcm9x"
    "UTU2Z24xeVE1RngyZXBkTVpyY2NtZGsvZGVidWcvZWNob2NleHAaaUvqj2Npc3N4"
    "OGRpZDprZXk6ejZNa3dDak1veVJFY1ZEN1ZrN2hCTUNyY1pNWG1pZktKcEhvN2JQ"
    "b3ExRUVrMk5KY25iZhpiS+f7Y3BvbIBjc3VieDhkaWQ6a2V5Ono2TWt1YkNWWWhS"
    "Y3FINEJEdFAxM3p3VkUxU3JvcVE1NmduMXlRNUZ4MmVwZE1acmRtZXRhoWRub3Rl"
    "eDNNb2NrIGRlbGVnYXRpb24gZ2VuZXJhdGVkIGxvY2FsbHkgYnkgVUNBTiBJbnNw"
    "ZWN0b3Jlbm9uY2VMQfDJBlGeGEDSiU60"
)

CORRUPT_DELEGATION = (
    "glhA/ynNOVcvmCF24rmT4ZYSVVKiWmeWvOr8RTP7amuL/iyu14oi9HN1RlNkJEsh"
    "YSVVqTh8YdIqbwZVFcCTU8v4BaJhaEg0Ae0B7QETcXN1Y2FuL2RsZ0AxLjAuMC1y"
    "Yy4xqWNhdWR4OGRpZDprZXk6ejZNa3ViQ1ZZaFJjcUg0QkR0UDEzendWRTFTcm9x"
    "UTU2Z24xeVE1RngyZXBkTVpyY2NtZGsvZGVidWcvZWNob2NleHAaaUvqj2Npc3N4"
    "OGRpZDprZXk6ejZNa3dDak1veVJFY1ZEN1ZrN2hCTUNyY1pNWG1pZktKcEhvN2JQ"
    "b3ExRUVrMk5KY25iZmJLx/tjcG9sY3N1Yng4ZGlkOmtleTp6Nk1rdWJDVlloUmNx"
    "SDRCRHRQMTN6d1ZFMVNyb3FRNTZnbjF5UTVGeDJlcGRNWnJkbWV0YaFkbm90ZXgz"
    "TW9jayBkZWxlZ2F0aW9uIGdlbmVyYXRlZCBsb2NhbGx5IGJ5IFVDQU4gSW5zcGVj"
    "dG9yZW5vbmNlTADwyVFAwk60"
)

DELEGATION_ISSUER = "did:key:z6MkwCoiyH2YJy36SnJJEsG2jZsxgnVjZZ7TxXUMxX48na8v"
DELEGATION_AUDIENCE = "did:key:z6Mkfs7BeqExvr3VhH6J9yD3cSPyf5Ug1FNeo5ZWN1bNGLnQ"
INVOCATION_ISSUER = "did:key:z6MktcPcQnnLBxBcx9wmKHF9JEbpTbdTEBGs2wQaqmFuTgFk"
INVOCATION_PROOF = "bafyreidqkrzgmfef5wxfivf7khmji5fta2eo7fccohqglowd5u44lb7v2q"

VERSION = "1.0.0-rc.1"
