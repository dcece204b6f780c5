from typing import Any, TypeVar

import kubernetes.client.api_client as k_api_client

KApiClient = k_api_client.ApiClient

T = TypeVar("T")


def serialize_k_model_to_dict(api_client: KApiClient, model: Any) -> Any:
    """Converts a Kubernetes model (i.e., OpenAPI model), or a list of them, to dict representation.
    Attribute names are mapped from snake_case to camelCase, `None` attributes are dropped."""
    return api_client.sanitize_for_serialization(model)


def deserialize_dict_to_k_model(api_client: KApiClient, data: dict, k_ref_type: type[T]) -> T:
    """Converts a dict to a Kubernetes model.
    Expects property names in camelCase, they will be converted to snake_case.
    """
    # Notice that the protected function provided by ApiClient creates Kubernetes
    # objects recursively, while the following won't work for nested properties:
    # secret = V1Secret(**dict_to_snake(data))
    # type(secret.metadata) == dict  # we don't get V1ObjectMeta
    return api_client._ApiClient__deserialize_model(data, k_ref_type)  # type: ignore # pylint: disable=protected-access


def as_k_model(api_client: KApiClient, data: Any, k_ref_type: type[T]) -> T:
    """Return `data` as is if already of type `k_ref_type`, deserialize it otherwise"""
    if isinstance(data, k_ref_type):
        return data
    return deserialize_dict_to_k_model(api_client, data, k_ref_type)
