from enum import Enum


class FilterMode(str, Enum):
    INCLUDE = "include"
    EXCLUDE = "exclude"


class Combinator(str, Enum):
    ANY = "any"
    ALL = "all"
