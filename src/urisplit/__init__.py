__version__ = "0.1"

from .errors import BuildError, EmptyRemainderError, FragmentMissingError, ParseError, PortNotNumericError, SchemeMissingError, UnexpectedRemainderError
from .parse import Authority, Stage, UrlComponents, UserInfo, build_authority, build_url, extract_authority, extract_fragment, extract_host, extract_path, extract_port, extract_query, extract_scheme, extract_userinfo, parse_authority, parse_url
from .query import DEFAULT_CODEC, FormCodec, QueryCodec
