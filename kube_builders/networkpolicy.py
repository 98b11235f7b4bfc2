"""Builder for MultiNetworkPolicy resources."""

import copy
import logging

from .builder import ResourceBuilder
from .chain import chained
from .exceptions import BuilderValidationError
from .ingress import IngressRuleBuilder
from .resource import LabelSelector
from .schemes.networkpolicy import (
    POLICY_FOR_ANNOTATION,
    MultiNetworkPolicy,
    MultiNetworkPolicyIngressRule,
)

__all__ = [
    "MultiNetworkPolicyBuilder",
]

_LOGGER = logging.getLogger(__name__)

POLICY_TYPES = ("Ingress", "Egress")


class MultiNetworkPolicyBuilder(ResourceBuilder[MultiNetworkPolicy]):
    """Builder for a MultiNetworkPolicy."""

    resource_cls = MultiNetworkPolicy

    @chained
    def with_network(self, network: str) -> None:
        """Apply the policy to a network attachment, given as `namespace/name`."""
        _LOGGER.debug("Setting MultiNetworkPolicy network %s", network)
        if not network:
            raise BuilderValidationError("MultiNetworkPolicy 'network' cannot be empty")
        metadata = self._definition().metadata
        metadata.annotations = {
            **(metadata.annotations or {}),
            POLICY_FOR_ANNOTATION: network,
        }

    @chained
    def with_pod_selector(self, pod_selector: LabelSelector) -> None:
        """Select the pods the policy applies to."""
        _LOGGER.debug("Setting MultiNetworkPolicy pod selector %s", pod_selector)
        self._definition().spec.pod_selector = copy.deepcopy(pod_selector)

    @chained
    def with_policy_type(self, policy_type: str) -> None:
        """Add `Ingress` or `Egress` to the policy types."""
        _LOGGER.debug("Adding MultiNetworkPolicy policy type %s", policy_type)
        if policy_type not in POLICY_TYPES:
            raise BuilderValidationError(
                f"MultiNetworkPolicy policy type must be one of {POLICY_TYPES}, got '{policy_type}'"
            )
        spec = self._definition().spec
        if policy_type not in (spec.policy_types or []):
            spec.policy_types = [*(spec.policy_types or []), policy_type]

    @chained
    def with_ingress_rule(
        self, rule: MultiNetworkPolicyIngressRule | IngressRuleBuilder
    ) -> None:
        """Append an ingress rule, built from an IngressRuleBuilder if one is given."""
        _LOGGER.debug("Adding ingress rule to MultiNetworkPolicy")
        if isinstance(rule, IngressRuleBuilder):
            rule = rule.build()
        spec = self._definition().spec
        spec.ingress = [*(spec.ingress or []), copy.deepcopy(rule)]
