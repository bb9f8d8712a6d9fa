from .form import Form, create_form
from .schema import (
    SchemaKind,
    SchemaNode,
    ObjectSchema,
    Issue,
    Success,
    Failure,
    string,
    number,
    integer,
    boolean,
    literal,
    any_value,
    array,
    transform,
    union,
    preprocess,
    object_schema,
)
from .introspect import is_required
from .adapter import ValidatorAdapter, ValidationOutcome
from .helpers import empty_to_undefined, optional_url
