from insta.errors.base import InstaError


class TopologyError(InstaError):
    kind = 'topology error'


class TopologyFetchError(TopologyError):
    kind = 'topology fetch error'
