"""Known ``DataVersion`` values and the releases they belong to.

``DataVersion`` was introduced with 1.9 (15w32a); older worlds do not carry it.
See https://minecraft.wiki/w/Data_version.
"""

from __future__ import annotations

DATA_VERSIONS: dict[int, str] = {
    # Version 1.21
    4189: "1.21.4 - December 3, 2024",
    4082: "1.21.3 - October 23, 2024",
    4080: "1.21.2 - October 22, 2024",
    3955: "1.21.1 - August 8, 2024",
    3953: "1.21 - June 13, 2024",

    # Version 1.20
    3839: "1.20.6 - April 29, 2024",
    3837: "1.20.5 - April 23, 2024",
    3700: "1.20.4 - December 7, 2023",
    3698: "1.20.3 - December 5, 2023",
    3578: "1.20.2 - September 21, 2023",
    3465: "1.20.1 - June 12, 2023",
    3463: "1.20 - June 7, 2023",

    # Version 1.19
    3337: "1.19.4 - March 14, 2023",
    3218: "1.19.3 - December 7, 2022",
    3120: "1.19.2 - August 5, 2022",
    3117: "1.19.1 - July 27, 2022",
    3105: "1.19 - June 7, 2022",

    # Version 1.18
    2975: "1.18.2 - February 28, 2022",
    2865: "1.18.1 - December 10, 2021",
    2860: "1.18 - November 30, 2021",

    # Version 1.17
    2730: "1.17.1 - July 6, 2021",
    2724: "1.17 - June 8, 2021",

    # Version 1.16
    2586: "1.16.5 - January 15, 2021",
    2584: "1.16.4 - November 2, 2020",
    2580: "1.16.3 - September 10, 2020",
    2578: "1.16.2 - August 11, 2020",
    2567: "1.16.1 - June 24, 2020",
    2566: "1.16 - June 23, 2020",

    # Version 1.15
    2230: "1.15.2 - January 21, 2020",
    2227: "1.15.1 - December 17, 2019",
    2225: "1.15 - December 10, 2019",

    # Version 1.14
    1976: "1.14.4 - July 19, 2019",
    1968: "1.14.3 - June 24, 2019",
    1963: "1.14.2 - May 27, 2019",
    1957: "1.14.1 - May 13, 2019",
    1952: "1.14 - April 23, 2019",

    # Version 1.13
    1631: "1.13.2 - October 22, 2018",
    1628: "1.13.1 - August 22, 2018",
    1519: "1.13 - July 18, 2018",

    # Version 1.12
    1343: "1.12.2 - September 18, 2017",
    1241: "1.12.1 - August 3, 2017",
    1139: "1.12 - June 7, 2017",

    # Version 1.11
    922: "1.11.2 - December 21, 2016",
    921: "1.11.1 - December 20, 2016",
    819: "1.11 - November 14, 2016",

    # Version 1.10
    512: "1.10.2 - June 23, 2016",
    511: "1.10.1 - June 22, 2016",
    510: "1.10 - June 8, 2016",

    # Version 1.9
    184: "1.9.4 - May 10, 2016",
    183: "1.9.3 - May 10, 2016",
    176: "1.9.2 - March 30, 2016",
    175: "1.9.1 - March 30, 2016",
    169: "1.9 - February 29, 2016",

    # April Fools versions
    3824: "April Fools version 2024: Java Edition 24w14potato",
    3444: "April Fools version 2023: Java Edition 23w13a_or_b",
    3076: "April Fools version 2022: Java Edition 22w13oneBlockAtATime",
    2522: "April Fools version 2020: Java Edition 20w14∞",
    1943: "April Fools version 2019: Java Edition 3D Shareware v1.34",
    173: "April Fools version 2016: Java Edition 1.RV-Pre1",
}

UNKNOWN = "???"


def newest_known_version() -> int:
    return max(DATA_VERSIONS)


def release_label(version: int | None) -> str:
    if version is None:
        return UNKNOWN
    return DATA_VERSIONS.get(version, UNKNOWN)


def describe_data_version(version: int | None) -> str:
    """Human readable ``"<version> (<release>)"`` line for reports."""
    if version is None:
        return "<1.9"
    newest = newest_known_version()
    if version > newest:
        return f"{version} (>{DATA_VERSIONS[newest]})"
    return f"{version} ({release_label(version)})"
