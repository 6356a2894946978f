"""Test fixtures for apitree tests.

This module provides sample API descriptions shaped like the Kubernetes
swagger document, plus small documents for edge cases.
"""

# Path templates of a trimmed-down Kubernetes core API
KUBERNETES_PATHS = {
    '/api/': {'get': {'operationId': 'getCoreAPIVersions'}},
    '/api/v1/': {'get': {'operationId': 'getCoreV1APIResources'}},
    '/api/v1/namespaces': {
        'get': {'operationId': 'listCoreV1Namespace'},
        'post': {'operationId': 'createCoreV1Namespace'},
        'parameters': [{'name': 'pretty', 'in': 'query'}],
    },
    '/api/v1/namespaces/{name}': {
        'get': {'operationId': 'readCoreV1Namespace'},
        'put': {'operationId': 'replaceCoreV1Namespace'},
        'delete': {'operationId': 'deleteCoreV1Namespace'},
        'patch': {'operationId': 'patchCoreV1Namespace'},
    },
    '/api/v1/namespaces/{namespace}/pods': {
        'get': {'operationId': 'listCoreV1NamespacedPod'},
        'post': {'operationId': 'createCoreV1NamespacedPod'},
        'delete': {'operationId': 'deleteCoreV1CollectionNamespacedPod'},
    },
    '/api/v1/namespaces/{namespace}/pods/{name}': {
        'get': {'operationId': 'readCoreV1NamespacedPod'},
        'put': {'operationId': 'replaceCoreV1NamespacedPod'},
        'delete': {'operationId': 'deleteCoreV1NamespacedPod'},
    },
    '/api/v1/namespaces/{namespace}/services': {
        'get': {'operationId': 'listCoreV1NamespacedService'},
        'post': {'operationId': 'createCoreV1NamespacedService'},
    },
    '/api/v1/namespaces/{namespace}/services/{name}': {
        'get': {'operationId': 'readCoreV1NamespacedService'},
        'delete': {'operationId': 'deleteCoreV1NamespacedService'},
    },
    '/api/v1/pods': {'get': {'operationId': 'listCoreV1PodForAllNamespaces'}},
    '/api/v1/nodes': {'get': {'operationId': 'listCoreV1Node'}},
    '/api/v1/nodes/{name}': {'get': {'operationId': 'readCoreV1Node'}},
    '/apis/': {'get': {'operationId': 'getAPIVersions'}},
    '/apis/batch/v1/namespaces/{namespace}/jobs': {
        'get': {'operationId': 'listBatchV1NamespacedJob'},
    },
    '/version/': {'get': {'operationId': 'getCodeVersion'}},
}

KUBERNETES_SWAGGER = {
    'swagger': '2.0',
    'info': {'title': 'Kubernetes', 'version': 'v1.5.0'},
    'paths': KUBERNETES_PATHS,
}

# The namespaces example: one node with collection and item verbs
NAMESPACES_PATHS = {
    '/namespaces': {'get': {}, 'post': {}},
    '/namespaces/{name}': {'get': {}, 'delete': {}},
}

PODS_PATHS = {'/pods': {'get': {}}}

PODS_OPENAPI = {
    'openapi': '3.0.0',
    'info': {'title': 'Pods', 'version': '1.0.0'},
    'paths': PODS_PATHS,
}

# Path items shared through $ref
REF_OPENAPI = {
    'openapi': '3.1.0',
    'info': {'title': 'Refs', 'version': '1.0.0'},
    'paths': {
        '/pets': {'$ref': '#/components/pathItems/Pets'},
        '/pets/{id}': {
            '$ref': '#/components/pathItems/Pet',
            'summary': 'A single pet',
        },
        '/broken': {'$ref': '#/components/pathItems/Missing'},
    },
    'components': {
        'pathItems': {
            'Pets': {'get': {}, 'post': {}},
            'Pet': {'get': {}, 'delete': {}, 'summary': 'Overridden'},
        }
    },
}
