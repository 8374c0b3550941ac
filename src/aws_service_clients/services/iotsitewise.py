#  Copyright Amazon.com, Inc. or its affiliates. All Rights Reserved.
#  SPDX-License-Identifier: Apache-2.0
"""AWS IoT SiteWise.

Operations are split across three endpoint host prefixes: ``api.`` for asset and
gateway management, ``data.`` for property values and ``monitor.`` for SiteWise
Monitor portals, projects and dashboards.
"""

from functools import partial

from ..client import ServiceClient
from ..model import Protocol, ServiceModel, op, query

_api = partial(op, host_prefix="api.")
_data = partial(op, host_prefix="data.")
_monitor = partial(op, host_prefix="monitor.")

_PAGING = (query("NextToken", "nextToken"), query("MaxResults", "maxResults"))
_TIME_SERIES = (
    query("Alias", "alias"),
    query("AssetId", "assetId"),
    query("PropertyId", "propertyId"),
)
_PROPERTY = (
    query("AssetId", "assetId"),
    query("PropertyId", "propertyId"),
    query("PropertyAlias", "propertyAlias"),
)
_RESOURCE_ARN = query("ResourceArn", "resourceArn")

_GATEWAYS = "/20200301/gateways"
_GATEWAY = f"{_GATEWAYS}/{{GatewayId}}"

SERVICE_MODEL = ServiceModel(
    service_name="IoTSiteWise",
    endpoint_prefix="iotsitewise",
    protocol=Protocol.REST_JSON,
    api_version="2019-12-02",
    operations=[
        _api("AssociateAssets", "POST", "/assets/{AssetId}/associate", "AssetId"),
        _api(
            "AssociateTimeSeriesToAssetProperty",
            "POST",
            "/timeseries/associate/",
            "Alias",
            "AssetId",
            "PropertyId",
            bindings=_TIME_SERIES,
        ),
        _monitor(
            "BatchAssociateProjectAssets",
            "POST",
            "/projects/{ProjectId}/assets/associate",
            "ProjectId",
        ),
        _monitor(
            "BatchDisassociateProjectAssets",
            "POST",
            "/projects/{ProjectId}/assets/disassociate",
            "ProjectId",
        ),
        _data("BatchGetAssetPropertyAggregates", "POST", "/properties/batch/aggregates"),
        _data("BatchGetAssetPropertyValue", "POST", "/properties/batch/latest"),
        _data("BatchGetAssetPropertyValueHistory", "POST", "/properties/batch/history"),
        _data("BatchPutAssetPropertyValue", "POST", "/properties"),
        _monitor("CreateAccessPolicy", "POST", "/access-policies"),
        _api("CreateAsset", "POST", "/assets"),
        _api("CreateAssetModel", "POST", "/asset-models"),
        _data("CreateBulkImportJob", "POST", "/jobs"),
        _monitor("CreateDashboard", "POST", "/dashboards"),
        _api("CreateGateway", "POST", _GATEWAYS),
        _monitor("CreatePortal", "POST", "/portals"),
        _monitor("CreateProject", "POST", "/projects"),
        _monitor(
            "DeleteAccessPolicy",
            "DELETE",
            "/access-policies/{AccessPolicyId}",
            "AccessPolicyId",
        ),
        _api("DeleteAsset", "DELETE", "/assets/{AssetId}", "AssetId"),
        _api("DeleteAssetModel", "DELETE", "/asset-models/{AssetModelId}", "AssetModelId"),
        _monitor("DeleteDashboard", "DELETE", "/dashboards/{DashboardId}", "DashboardId"),
        _api("DeleteGateway", "DELETE", _GATEWAY, "GatewayId"),
        _monitor("DeletePortal", "DELETE", "/portals/{PortalId}", "PortalId"),
        _monitor("DeleteProject", "DELETE", "/projects/{ProjectId}", "ProjectId"),
        _api("DeleteTimeSeries", "POST", "/timeseries/delete/", bindings=_TIME_SERIES),
        _monitor(
            "DescribeAccessPolicy",
            "GET",
            "/access-policies/{AccessPolicyId}",
            "AccessPolicyId",
        ),
        _api("DescribeAsset", "GET", "/assets/{AssetId}", "AssetId"),
        _api("DescribeAssetModel", "GET", "/asset-models/{AssetModelId}", "AssetModelId"),
        _api(
            "DescribeAssetProperty",
            "GET",
            "/assets/{AssetId}/properties/{PropertyId}",
            "AssetId",
            "PropertyId",
        ),
        _data("DescribeBulkImportJob", "GET", "/jobs/{JobId}", "JobId"),
        _monitor("DescribeDashboard", "GET", "/dashboards/{DashboardId}", "DashboardId"),
        _api(
            "DescribeDefaultEncryptionConfiguration",
            "GET",
            "/configuration/account/encryption",
        ),
        _api("DescribeGateway", "GET", _GATEWAY, "GatewayId"),
        _api(
            "DescribeGatewayCapabilityConfiguration",
            "GET",
            f"{_GATEWAY}/capability/{{CapabilityNamespace}}",
            "GatewayId",
            "CapabilityNamespace",
        ),
        _api("DescribeLoggingOptions", "GET", "/logging"),
        _monitor("DescribePortal", "GET", "/portals/{PortalId}", "PortalId"),
        _monitor("DescribeProject", "GET", "/projects/{ProjectId}", "ProjectId"),
        _api("DescribeStorageConfiguration", "GET", "/configuration/account/storage"),
        _api("DescribeTimeSeries", "GET", "/timeseries/describe/", bindings=_TIME_SERIES),
        _api("DisassociateAssets", "POST", "/assets/{AssetId}/disassociate", "AssetId"),
        _api(
            "DisassociateTimeSeriesFromAssetProperty",
            "POST",
            "/timeseries/disassociate/",
            "Alias",
            "AssetId",
            "PropertyId",
            bindings=_TIME_SERIES,
        ),
        _data(
            "GetAssetPropertyAggregates",
            "GET",
            "/properties/aggregates",
            "AggregateTypes",
            "Resolution",
            "StartDate",
            "EndDate",
            bindings=[
                *_PROPERTY,
                query("AggregateTypes", "aggregateTypes"),
                query("Resolution", "resolution"),
                query("Qualities", "qualities"),
                query("StartDate", "startDate"),
                query("EndDate", "endDate"),
                query("TimeOrdering", "timeOrdering"),
                *_PAGING,
            ],
        ),
        _data("GetAssetPropertyValue", "GET", "/properties/latest", bindings=_PROPERTY),
        _data(
            "GetAssetPropertyValueHistory",
            "GET",
            "/properties/history",
            bindings=[
                *_PROPERTY,
                query("StartDate", "startDate"),
                query("EndDate", "endDate"),
                query("Qualities", "qualities"),
                query("TimeOrdering", "timeOrdering"),
                *_PAGING,
            ],
        ),
        _data(
            "GetInterpolatedAssetPropertyValues",
            "GET",
            "/properties/interpolated",
            "StartTimeInSeconds",
            "EndTimeInSeconds",
            "Quality",
            "IntervalInSeconds",
            "Type",
            bindings=[
                *_PROPERTY,
                query("StartTimeInSeconds", "startTimeInSeconds"),
                query("StartTimeOffsetInNanos", "startTimeOffsetInNanos"),
                query("EndTimeInSeconds", "endTimeInSeconds"),
                query("EndTimeOffsetInNanos", "endTimeOffsetInNanos"),
                query("Quality", "quality"),
                query("IntervalInSeconds", "intervalInSeconds"),
                *_PAGING,
                query("Type", "type"),
                query("IntervalWindowInSeconds", "intervalWindowInSeconds"),
            ],
        ),
        _monitor(
            "ListAccessPolicies",
            "GET",
            "/access-policies",
            bindings=[
                query("IdentityType", "identityType"),
                query("IdentityId", "identityId"),
                query("ResourceType", "resourceType"),
                query("ResourceId", "resourceId"),
                query("IamArn", "iamArn"),
                *_PAGING,
            ],
        ),
        _api(
            "ListAssetModelProperties",
            "GET",
            "/asset-models/{AssetModelId}/properties",
            "AssetModelId",
            bindings=[*_PAGING, query("Filter", "filter")],
        ),
        _api("ListAssetModels", "GET", "/asset-models", bindings=_PAGING),
        _api(
            "ListAssetProperties",
            "GET",
            "/assets/{AssetId}/properties",
            "AssetId",
            bindings=[*_PAGING, query("Filter", "filter")],
        ),
        _api(
            "ListAssetRelationships",
            "GET",
            "/assets/{AssetId}/assetRelationships",
            "AssetId",
            "TraversalType",
            bindings=[query("TraversalType", "traversalType"), *_PAGING],
        ),
        _api(
            "ListAssets",
            "GET",
            "/assets",
            bindings=[
                *_PAGING,
                query("AssetModelId", "assetModelId"),
                query("Filter", "filter"),
            ],
        ),
        _api(
            "ListAssociatedAssets",
            "GET",
            "/assets/{AssetId}/hierarchies",
            "AssetId",
            bindings=[
                query("HierarchyId", "hierarchyId"),
                query("TraversalDirection", "traversalDirection"),
                *_PAGING,
            ],
        ),
        _data("ListBulkImportJobs", "GET", "/jobs", bindings=[*_PAGING, query("Filter", "filter")]),
        _monitor(
            "ListDashboards",
            "GET",
            "/dashboards",
            "ProjectId",
            bindings=[query("ProjectId", "projectId"), *_PAGING],
        ),
        _api("ListGateways", "GET", _GATEWAYS, bindings=_PAGING),
        _monitor("ListPortals", "GET", "/portals", bindings=_PAGING),
        _monitor(
            "ListProjectAssets",
            "GET",
            "/projects/{ProjectId}/assets",
            "ProjectId",
            bindings=_PAGING,
        ),
        _monitor(
            "ListProjects",
            "GET",
            "/projects",
            "PortalId",
            bindings=[query("PortalId", "portalId"), *_PAGING],
        ),
        _api(
            "ListTagsForResource",
            "GET",
            "/tags",
            "ResourceArn",
            bindings=[_RESOURCE_ARN],
        ),
        _api(
            "ListTimeSeries",
            "GET",
            "/timeseries/",
            bindings=[
                *_PAGING,
                query("AssetId", "assetId"),
                query("AliasPrefix", "aliasPrefix"),
                query("TimeSeriesType", "timeSeriesType"),
            ],
        ),
        _api(
            "PutDefaultEncryptionConfiguration",
            "POST",
            "/configuration/account/encryption",
        ),
        _api("PutLoggingOptions", "PUT", "/logging"),
        _api("PutStorageConfiguration", "POST", "/configuration/account/storage"),
        _api("TagResource", "POST", "/tags", "ResourceArn", bindings=[_RESOURCE_ARN]),
        _api(
            "UntagResource",
            "DELETE",
            "/tags",
            "ResourceArn",
            "TagKeys",
            bindings=[_RESOURCE_ARN, query("TagKeys", "tagKeys")],
        ),
        _monitor(
            "UpdateAccessPolicy",
            "PUT",
            "/access-policies/{AccessPolicyId}",
            "AccessPolicyId",
        ),
        _api("UpdateAsset", "PUT", "/assets/{AssetId}", "AssetId"),
        _api("UpdateAssetModel", "PUT", "/asset-models/{AssetModelId}", "AssetModelId"),
        _api(
            "UpdateAssetProperty",
            "PUT",
            "/assets/{AssetId}/properties/{PropertyId}",
            "AssetId",
            "PropertyId",
        ),
        _monitor("UpdateDashboard", "PUT", "/dashboards/{DashboardId}", "DashboardId"),
        _api("UpdateGateway", "PUT", _GATEWAY, "GatewayId"),
        _api(
            "UpdateGatewayCapabilityConfiguration",
            "POST",
            f"{_GATEWAY}/capability",
            "GatewayId",
        ),
        _monitor("UpdatePortal", "PUT", "/portals/{PortalId}", "PortalId"),
        _monitor("UpdateProject", "PUT", "/projects/{ProjectId}", "ProjectId"),
    ],
)


class IoTSiteWiseClient(ServiceClient):
    SERVICE_MODEL = SERVICE_MODEL
