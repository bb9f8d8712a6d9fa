"""
Schemas for the identity service's administrative forms.

Field names follow the Python side of the API (snake_case); length limits
and patterns match what the server accepts.
"""
from formstate.form.helpers import empty_to_undefined, optional_url
from formstate.form.schema import (
    ObjectSchema,
    array,
    boolean,
    integer,
    object_schema,
    string,
)

USERNAME_PATTERN = r"[a-zA-Z0-9]([a-zA-Z0-9_.@-]*[a-zA-Z0-9])?"
CLIENT_ID_PATTERN = r"[a-zA-Z0-9._-]+"

USERNAME_MESSAGE = (
    "Username can only contain letters, numbers, underscores, dots, hyphens, "
    "and '@' symbols, and must start and end with a letter or number"
)


def username_field():
    return string().min_length(1).max_length(50).regex(USERNAME_PATTERN, USERNAME_MESSAGE)


def signup_schema() -> ObjectSchema:
    return object_schema(
        first_name=string().min_length(1).max_length(50),
        last_name=empty_to_undefined(string().max_length(50).optional()),
        username=username_field(),
        email=empty_to_undefined(string().email().optional()),
    )


def user_schema() -> ObjectSchema:
    schema = signup_schema()
    schema.field("display_name", string().min_length(1).max_length(100))
    schema.field("is_admin", boolean().default(False))
    schema.field("disabled", boolean().default(False))
    schema.field("locale", empty_to_undefined(string().optional()))
    return schema


def oidc_client_schema() -> ObjectSchema:
    return object_schema(
        id=empty_to_undefined(
            string().max_length(128).regex(CLIENT_ID_PATTERN, "Client ID may only contain letters, numbers, dots, underscores and hyphens").optional()
        ),
        name=string().min_length(2).max_length(50),
        callback_urls=array(string().url()).default(list),
        logout_callback_urls=array(string().url()).default(list),
        is_public=boolean().default(False),
        pkce_enabled=boolean().default(False),
        launch_url=optional_url(),
    )


def user_group_schema() -> ObjectSchema:
    return object_schema(
        friendly_name=string().min_length(2).max_length(50),
        name=string().min_length(2).max_length(255),
    )


def signup_token_schema() -> ObjectSchema:
    return object_schema(
        ttl=integer(coerce=True).min_value(1),
        usage_limit=integer(coerce=True).min_value(1).max_value(100),
    )
