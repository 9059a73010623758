"""Owl — camada de configuração (core).

Componentes canônicos da linguagem `.owl`:
 - tokenização e parse (AST)
 - resolução de grupos e merge host-sobre-global
 - diagnósticos e erros tipados
 - hashing, exportação e descoberta de arquivos relevantes
"""

from .errors import (  # noqa: F401
    OwlConfigError,
    StructuralError,
    ContextError,
    GroupReferenceError,
    CycleError,
    UnknownDirectiveError,
    GlobalConfigNotFoundError,
    ConfigReadError,
    UnsupportedExportFormatError,
)

from .diagnostics import Diagnostic  # noqa: F401
from .export import dump_resolved_config, write_resolved_config  # noqa: F401
from .hashing import compute_config_hash  # noqa: F401
from .loader import ConfigLoader, load_config_for_host  # noqa: F401
from .model import ConfigMapping, Entry, EnvVar, ResolvedConfig, ServiceSpec  # noqa: F401
from .parser import Parser, parse_tokens  # noqa: F401
from .relevance import relevant_config_files  # noqa: F401
from .tokens import Token, TokenKind, tokenize  # noqa: F401
