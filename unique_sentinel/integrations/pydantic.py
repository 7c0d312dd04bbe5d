from typing import Annotated, Any

from unique_sentinel import Registry, Sentinel
from unique_sentinel.exceptions import SentinelError
from unique_sentinel.integrations import _is_installed

__all__ = ("SentinelField", "SentinelSchema")

if _is_installed("pydantic", __name__):
    from pydantic import GetCoreSchemaHandler, GetJsonSchemaHandler
    from pydantic.json_schema import JsonSchemaValue
    from pydantic_core import CoreSchema, core_schema


class SentinelSchema:
    """
    Pydantic metadata for sentinel fields. Sentinels are dumped to JSON as their
    qualified name and resolved back to the same instance.
    """

    __slots__ = ("__registry",)

    __registry: Registry | None

    def __init__(self, registry: Registry | None = None) -> None:
        self.__registry = registry

    @property
    def registry(self) -> Registry:
        if self.__registry is None:
            return Registry.current()

        return self.__registry

    def __get_pydantic_core_schema__(
        self,
        source: Any,
        handler: GetCoreSchemaHandler,
    ) -> CoreSchema:
        return core_schema.no_info_plain_validator_function(
            self.__validate,
            serialization=core_schema.plain_serializer_function_ser_schema(
                self.__serialize,
                info_arg=True,
            ),
        )

    def __get_pydantic_json_schema__(
        self,
        schema: CoreSchema,
        handler: GetJsonSchemaHandler,
    ) -> JsonSchemaValue:
        return {"type": "string", "format": "sentinel"}

    def __validate(self, value: Any) -> Sentinel:
        if isinstance(value, Sentinel):
            return value

        if not isinstance(value, str):
            raise ValueError(
                f"Expected a sentinel or a qualified name, got `{type(value)}`."
            )

        try:
            return self.registry.resolve(value)
        except SentinelError as exc:
            raise ValueError(str(exc)) from exc

    @staticmethod
    def __serialize(value: Sentinel, info: core_schema.SerializationInfo) -> Any:
        if info.mode_is_json():
            return value.name

        return value


SentinelField = Annotated[Sentinel, SentinelSchema()]
