"""Token categories and the keyword table of Thenga Lang.

Every keyword is a Malayalam slang spelling mapped to exactly one category:

```
ith_aan x = 10              ; variable declaration       ith_fixed_aan x = 10   ; constant declaration
sheriya / sheriyalla        ; true / false                onnum_illa             ; null
para(x)                     ; print                       chodhik("name?")       ; input
seriyano (c) {} allelum (c) {} allengil {}                ; if / else if / else
repeat_adi (5) {}           ; counted loop (index i)      odi_repeat_mwone (c) {}  ; while loop
pani f(a, b) {}             ; function                    thirich_tha x          ; return
try_cheyth_nokk {} pidikk (e) {} ettavum_avasanam {}      ; try / catch / finally
```

Comparison and logical operators also have word forms (`velliya` is `>`, `pinnem` is `&&`, ...).
"""

from dataclasses import dataclass
from enum import Enum
from types import MappingProxyType


class TokenType(Enum):
    """Closed set of token categories."""

    NUMBER = "NUMBER"
    STRING = "STRING"
    IDENTIFIER = "IDENTIFIER"

    # declarations
    ITH_AAN = "ITH_AAN"
    ITH_FIXED_AAN = "ITH_FIXED_AAN"

    # literals
    SHERIYA = "SHERIYA"
    SHERIYALLA = "SHERIYALLA"
    ONNUM_ILLA = "ONNUM_ILLA"

    # i/o
    PARA = "PARA"
    CHODHIK = "CHODHIK"
    THERI_VILI = "THERI_VILI"
    LOG_CHEYY = "LOG_CHEYY"

    # conditionals
    SERIYANO = "SERIYANO"
    ALLELUM = "ALLELUM"
    ALLENGIL = "ALLENGIL"

    # loops
    REPEAT_ADI = "REPEAT_ADI"
    ODI_REPEAT_MWONE = "ODI_REPEAT_MWONE"
    ODARUTH_MONE = "ODARUTH_MONE"
    VITT_KALA = "VITT_KALA"

    # functions
    PANI = "PANI"
    THIRICH_THA = "THIRICH_THA"
    VILI = "VILI"

    # memory
    NEE_PO_MONE_DINESHA = "NEE_PO_MONE_DINESHA"
    SHERIKKUM_POKKODA = "SHERIKKUM_POKKODA"
    ITHENTHONN = "ITHENTHONN"
    COPY_ADI = "COPY_ADI"

    # sequences
    ARRAY = "ARRAY"
    PUSH = "PUSH"
    POP = "POP"
    LENGTH = "LENGTH"

    # text helpers
    JOIN_PANNUDA = "JOIN_PANNUDA"
    SPLIT_PANNUDA = "SPLIT_PANNUDA"
    TRIM_PANNUDA = "TRIM_PANNUDA"
    KOOTI_VEKKADA = "KOOTI_VEKKADA"

    # math helpers
    KOOTTU = "KOOTTU"
    KURAKKU = "KURAKKU"
    GUNIKKU = "GUNIKKU"
    HARIKKU = "HARIKKU"
    RANDOM = "RANDOM"

    # special statements and checks
    ADIPOLI_AAN = "ADIPOLI_AAN"
    NER_AANO_MWONE = "NER_AANO_MWONE"
    ENTHADA_ITH = "ENTHADA_ITH"
    SCENE_IDD = "SCENE_IDD"
    CHUMMA_IRI_MONE = "CHUMMA_IRI_MONE"
    ITH_MANASILAAYO = "ITH_MANASILAAYO"
    AALU_SHERI_AANO = "AALU_SHERI_AANO"
    KETT_PARANJU = "KETT_PARANJU"

    # error handling
    TRY_CHEYTH_NOKK = "TRY_CHEYTH_NOKK"
    PIDIKK = "PIDIKK"
    ETTAVUM_AVASANAM = "ETTAVUM_AVASANAM"

    # async
    KATH_MONE = "KATH_MONE"
    PINNE_PARAYAM = "PINNE_PARAYAM"
    PAND_MUNNE = "PAND_MUNNE"

    # comparison
    SAME_AANO = "SAME_AANO"                # ==
    BILKUL_SAME = "BILKUL_SAME"            # ===
    VELLIYA = "VELLIYA"                    # >
    CHERIYA = "CHERIYA"                    # <
    VELLIYATHUM_SAME = "VELLIYATHUM_SAME"  # >=
    CHERIYATHUM_SAME = "CHERIYATHUM_SAME"  # <=
    VENDATHILLA = "VENDATHILLA"            # !=

    # logical
    PINNEM = "PINNEM"                      # &&
    ALLEL = "ALLEL"                        # ||
    ONNUM_VENDA = "ONNUM_VENDA"            # !

    # arithmetic
    PLUS = "PLUS"
    MINUS = "MINUS"
    MULTIPLY = "MULTIPLY"
    DIVIDE = "DIVIDE"
    MODULO = "MODULO"

    EQUALS = "EQUALS"

    # delimiters
    LPAREN = "LPAREN"
    RPAREN = "RPAREN"
    LBRACE = "LBRACE"
    RBRACE = "RBRACE"
    LBRACKET = "LBRACKET"
    RBRACKET = "RBRACKET"
    COMMA = "COMMA"
    SEMICOLON = "SEMICOLON"
    DOT = "DOT"
    COLON = "COLON"

    EOF = "EOF"


KEYWORDS = MappingProxyType({
    "ith_aan": TokenType.ITH_AAN,
    "ith_fixed_aan": TokenType.ITH_FIXED_AAN,

    "sheriya": TokenType.SHERIYA,
    "sheriyalla": TokenType.SHERIYALLA,
    "onnum_illa": TokenType.ONNUM_ILLA,

    "para": TokenType.PARA,
    "chodhik": TokenType.CHODHIK,
    "theri_vili": TokenType.THERI_VILI,
    "log_cheyy": TokenType.LOG_CHEYY,

    "seriyano": TokenType.SERIYANO,
    "allelum": TokenType.ALLELUM,
    "allengil": TokenType.ALLENGIL,

    "repeat_adi": TokenType.REPEAT_ADI,
    "odi_repeat_mwone": TokenType.ODI_REPEAT_MWONE,
    "odaruth_mone": TokenType.ODARUTH_MONE,
    "vitt_kala": TokenType.VITT_KALA,

    "pani": TokenType.PANI,
    "thirich_tha": TokenType.THIRICH_THA,
    "vili": TokenType.VILI,

    "nee_po_mone_dinesha": TokenType.NEE_PO_MONE_DINESHA,
    "sherikkum_pokkoda": TokenType.SHERIKKUM_POKKODA,
    "ithenthonn": TokenType.ITHENTHONN,
    "copy_adi": TokenType.COPY_ADI,

    "array": TokenType.ARRAY,
    "push": TokenType.PUSH,
    "pop": TokenType.POP,
    "length": TokenType.LENGTH,

    "join_pannuda": TokenType.JOIN_PANNUDA,
    "split_pannuda": TokenType.SPLIT_PANNUDA,
    "trim_pannuda": TokenType.TRIM_PANNUDA,
    "kooti_vekkada": TokenType.KOOTI_VEKKADA,

    "koottu": TokenType.KOOTTU,
    "kurakku": TokenType.KURAKKU,
    "gunikku": TokenType.GUNIKKU,
    "harikku": TokenType.HARIKKU,
    "random": TokenType.RANDOM,

    "adipoli_aan": TokenType.ADIPOLI_AAN,
    "ner_aano_mwone": TokenType.NER_AANO_MWONE,
    "enthada_ith": TokenType.ENTHADA_ITH,
    "scene_idd": TokenType.SCENE_IDD,
    "chumma_iri_mone": TokenType.CHUMMA_IRI_MONE,
    "ith_manasilaayo": TokenType.ITH_MANASILAAYO,
    "aalu_sheri_aano": TokenType.AALU_SHERI_AANO,
    "kett_paranju": TokenType.KETT_PARANJU,

    "try_cheyth_nokk": TokenType.TRY_CHEYTH_NOKK,
    "pidikk": TokenType.PIDIKK,
    "ettavum_avasanam": TokenType.ETTAVUM_AVASANAM,

    "kath_mone": TokenType.KATH_MONE,
    "pinne_parayam": TokenType.PINNE_PARAYAM,
    "pand_munne": TokenType.PAND_MUNNE,

    "same_aano": TokenType.SAME_AANO,
    "bilkul_same": TokenType.BILKUL_SAME,
    "velliya": TokenType.VELLIYA,
    "cheriya": TokenType.CHERIYA,
    "velliyathum_same": TokenType.VELLIYATHUM_SAME,
    "cheriyathum_same": TokenType.CHERIYATHUM_SAME,
    "vendathilla": TokenType.VENDATHILLA,

    "pinnem": TokenType.PINNEM,
    "allel": TokenType.ALLEL,
    "onnum_venda": TokenType.ONNUM_VENDA,
})

SPELLINGS = MappingProxyType({category: spelling for spelling, category in KEYWORDS.items()})

# literal values carried by keyword tokens at scan time
KEYWORD_LITERALS = MappingProxyType({
    TokenType.SHERIYA: True,
    TokenType.SHERIYALLA: False,
    TokenType.ONNUM_ILLA: None,
})

# symbol used in the syntax tree for operator categories (word forms included)
OPERATOR_SYMBOLS = MappingProxyType({
    TokenType.SAME_AANO: "==",
    TokenType.BILKUL_SAME: "===",
    TokenType.VENDATHILLA: "!=",
    TokenType.VELLIYA: ">",
    TokenType.CHERIYA: "<",
    TokenType.VELLIYATHUM_SAME: ">=",
    TokenType.CHERIYATHUM_SAME: "<=",
    TokenType.PINNEM: "&&",
    TokenType.ALLEL: "||",
    TokenType.ONNUM_VENDA: "!",
    TokenType.PLUS: "+",
    TokenType.MINUS: "-",
    TokenType.MULTIPLY: "*",
    TokenType.DIVIDE: "/",
    TokenType.MODULO: "%",
})


@dataclass(frozen=True)
class Token:
    """Minimal lexical unit. value is the literal (number, text, boolean or None) or the keyword/symbol spelling."""
    type: TokenType
    value: object
    line: int
    column: int

    @property
    def spelling(self):
        """Source spelling of keyword tokens, the literal value otherwise."""
        return SPELLINGS.get(self.type, self.value)

    def __repr__(self):
        return f"Token({self.type.name}, {self.value!r}, {self.line}:{self.column})"
