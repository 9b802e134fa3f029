"""
Data shapes exchanged with the iTwins service.

The resource shapes are :class:`~typing.TypedDict` definitions that
mirror the service's JSON contract key for key.  Property names are
case sensitive, and several resources carry a ``class`` key, which is
why those types use the functional ``TypedDict`` syntax.  Responses
are returned to callers as plain dictionaries; the types exist for
static checking and documentation only.

Every client operation returns an :class:`APIResponse` envelope.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Generic, List, Literal, Optional, TypedDict, TypeVar

T = TypeVar("T")

Method = Literal["GET", "POST", "PUT", "PATCH", "DELETE"]
ResultMode = Literal["minimal", "representation"]
ITwinQueryScope = Literal["memberOfItwin", "all", "OrganizationAdmin"]
ImageContentType = Literal["image/png", "image/jpeg"]

# ----------------------------------------------------------------------
# Errors and envelope
# ----------------------------------------------------------------------


class _ErrorDetailBase(TypedDict):
    code: str
    message: str


class ErrorDetail(_ErrorDetailBase, total=False):
    target: str


class _ApimErrorBase(TypedDict):
    code: str
    message: str


class ApimError(_ApimErrorBase, total=False):
    """Error object returned by the service, or synthesized by the client."""

    details: List[ErrorDetail]
    target: str


@dataclass
class APIResponse(Generic[T]):
    """Uniform result of every client operation.

    Attributes
    ----------
    status : int
        HTTP status reported by the service, or the status the client
        assigned to a synthesized error (500 for transport failures).
    data : object, optional
        Parsed response payload.  ``None`` for empty bodies and for
        error responses.
    error : dict, optional
        The :class:`ApimError` describing a failure.
    """

    status: int
    data: Optional[T] = None
    error: Optional[ApimError] = None

    @property
    def ok(self) -> bool:
        return self.error is None and 200 <= self.status < 300


# ----------------------------------------------------------------------
# HAL links
# ----------------------------------------------------------------------


class Link(TypedDict):
    href: str


class _LinksBase(TypedDict):
    self: Link


class Links(_LinksBase, total=False):
    prev: Link
    next: Link


# ----------------------------------------------------------------------
# iTwins
# ----------------------------------------------------------------------

ITwinClass = Literal["Thing", "Endeavor"]
ITwinSubClass = Literal["Account", "Asset", "Project", "Portfolio", "Program", "WorkPackage"]
ITwinStatus = Literal["Trial", "Active", "Inactive"]

ITwinMinimal = TypedDict(
    "ITwinMinimal",
    {
        "id": str,
        "class": ITwinClass,
        "subClass": ITwinSubClass,
        "type": str,
        "displayName": str,
        "number": str,
        "iTwinAccountId": str,
    },
    total=False,
)


class ITwinRepresentation(ITwinMinimal, total=False):
    dataCenterLocation: str
    status: ITwinStatus
    parentId: str
    ianaTimeZone: str
    imageName: str
    image: str
    createdDateTime: str
    createdBy: str
    geographicLocation: str
    latitude: float
    longitude: float
    lastModifiedDateTime: str
    lastModifiedBy: str


ITwinCreate = TypedDict(
    "ITwinCreate",
    {
        "class": ITwinClass,
        "subClass": ITwinSubClass,
        "type": str,
        "displayName": str,
        "number": str,
        "dataCenterLocation": str,
        "status": ITwinStatus,
        "parentId": str,
        "ianaTimeZone": str,
        "geographicLocation": str,
        "latitude": float,
        "longitude": float,
    },
    total=False,
)

# Every create field is optional on update as well.
ITwinUpdate = ITwinCreate


class ITwinResponse(TypedDict):
    iTwin: ITwinRepresentation


class MultiITwinResponse(TypedDict):
    iTwins: List[ITwinRepresentation]
    _links: Links


# ----------------------------------------------------------------------
# Repositories and resources
# ----------------------------------------------------------------------

RepositoryClass = Literal[
    "iModels",
    "Storage",
    "Forms",
    "Issues",
    "RealityData",
    "GeographicInformationSystem",
    "Construction",
    "Subsurface",
    "GeospatialFeatures",
    "CesiumCuratedContent",
    "SensorData",
    "PdfPlansets",
    "IndexedMedia",
]
RepositorySubClass = Literal[
    "WebMapService",
    "WebMapTileService",
    "ArcGIS",
    "UrlTemplate",
    "EvoWorkspace",
    "Performance",
]
CreatableRepositoryClass = Literal["GeographicInformationSystem", "Construction", "Subsurface"]


class RepositoryAuthentication(TypedDict, total=False):
    """Credentials the service uses when it contacts the repository.

    ``Header`` and ``QueryParameter`` carry ``key``/``value``; ``Basic``
    carries ``username``/``password``.
    """

    type: Literal["Header", "QueryParameter", "Basic"]
    key: str
    value: str
    username: str
    password: str


class RepositoryOptions(TypedDict, total=False):
    queryParameters: Dict[str, str]


class CapabilityLink(TypedDict):
    uri: str


class RepositoryCapabilities(TypedDict, total=False):
    resources: CapabilityLink


Repository = TypedDict(
    "Repository",
    {
        "id": str,
        "class": RepositoryClass,
        "subClass": RepositorySubClass,
        "displayName": str,
        "uri": str,
        "authentication": RepositoryAuthentication,
        "options": Dict[str, Any],
        "capabilities": RepositoryCapabilities,
    },
    total=False,
)

NewRepositoryConfig = TypedDict(
    "NewRepositoryConfig",
    {
        "class": CreatableRepositoryClass,
        "subClass": RepositorySubClass,
        "displayName": str,
        "uri": str,
        "authentication": RepositoryAuthentication,
        "options": Dict[str, Any],
    },
    total=False,
)


class RepositoryUpdate(TypedDict, total=False):
    displayName: str
    uri: str
    authentication: RepositoryAuthentication
    options: Dict[str, Any]


class NewRepositoryResource(TypedDict):
    id: str
    displayName: str


class ResourceCapabilities(TypedDict, total=False):
    graphics: CapabilityLink


RepositoryResource = TypedDict(
    "RepositoryResource",
    {
        "id": str,
        "displayName": str,
        "class": RepositoryClass,
        "subClass": RepositorySubClass,
        "type": str,
        "capabilities": ResourceCapabilities,
        # representation mode only
        "properties": Dict[str, Any],
    },
    total=False,
)


class ResourceGraphic(TypedDict, total=False):
    uri: str
    type: str
    authentication: RepositoryAuthentication


class SingleRepositoryResponse(TypedDict):
    repository: Repository


class MultiRepositoriesResponse(TypedDict):
    repositories: List[Repository]


class RepositoryResourceResponse(TypedDict):
    resource: RepositoryResource


class MultiRepositoryResourceResponse(TypedDict):
    resources: List[RepositoryResource]
    _links: Links


class ResourceGraphicsResponse(TypedDict):
    graphics: List[ResourceGraphic]


# ----------------------------------------------------------------------
# Exports and images
# ----------------------------------------------------------------------

ExportQueryScope = Literal["MemberOfiTwin", "OrganizationAdmin"]
ExportOutputFormat = Literal["JsonGZip", "JsonZipArchive", "CsvGZip", "Csv"]
ExportStatus = Literal["Queued", "InProgress", "Completed", "Failed"]


class _ExportRequestBase(TypedDict):
    outputFormat: ExportOutputFormat


class ITwinExportRequestInfo(_ExportRequestBase, total=False):
    queryScope: ExportQueryScope
    subClass: str
    select: str
    filter: str
    includeInactive: bool


class ITwinExport(TypedDict):
    id: str
    request: ITwinExportRequestInfo
    status: ExportStatus
    outputUrl: Optional[str]
    createdBy: str
    createdDateTime: str
    startedDateTime: Optional[str]
    completedDateTime: Optional[str]


class ITwinExportSingleResponse(TypedDict):
    export: ITwinExport


class ITwinExportMultiResponse(TypedDict):
    exports: List[ITwinExport]


class ITwinImage(TypedDict):
    id: str
    smallImageName: str
    smallImageUrl: str
    largeImageName: str
    largeImageUrl: str


class ITwinImageResponse(TypedDict):
    image: ITwinImage


# ----------------------------------------------------------------------
# Query arguments
# ----------------------------------------------------------------------


class ODataQueryArg(TypedDict, total=False):
    top: int
    skip: int
    search: str


class ITwinsQueryArg(ODataQueryArg, total=False):
    subClass: ITwinSubClass
    includeInactive: bool
    status: str
    type: str
    displayName: str
    number: str
    parentId: str
    iTwinAccountId: str
    # sent as headers, never as query parameters
    resultMode: ResultMode
    queryScope: ITwinQueryScope


class ITwinsGetQueryArg(ITwinsQueryArg, total=False):
    filter: str
    orderby: str
    select: str


RepositoriesQueryArg = TypedDict(
    "RepositoriesQueryArg",
    {"class": RepositoryClass, "subClass": RepositorySubClass},
    total=False,
)
