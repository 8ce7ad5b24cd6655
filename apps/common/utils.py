"""
Response envelopes shared by every endpoint: ``{code, msg, data}`` on
success and ``{code, msg, errors}`` on failure.
"""
from rest_framework.pagination import PageNumberPagination
from rest_framework.response import Response
from rest_framework import status


def success_response(data=None, message="Success", status_code=status.HTTP_200_OK):
    response_data = {
        "code": status_code,
        "msg": message,
        "data": data
    }
    return Response(response_data, status=status_code)


def error_response(message="Error", errors=None, status_code=status.HTTP_400_BAD_REQUEST):
    response_data = {
        "code": status_code,
        "msg": message
    }
    if errors:
        response_data["errors"] = errors
    return Response(response_data, status=status_code)


def settlement_error_response(exc):
    """Render a SettlementError with its code and details under ``errors``"""
    return error_response(exc.message, exc.as_dict(), exc.status_code)


def paginated_response(queryset, serializer_class, request, message="Success"):
    """
    Page a queryset with DRF page-number pagination inside the success envelope
    """
    paginator = PageNumberPagination()
    page = paginator.paginate_queryset(queryset, request)

    if page is None:
        results = serializer_class(queryset, many=True).data
        return success_response({'count': len(results), 'next': None, 'previous': None, 'results': results},
                                message)

    return success_response({
        'count': paginator.page.paginator.count,
        'next': paginator.get_next_link(),
        'previous': paginator.get_previous_link(),
        'results': serializer_class(page, many=True).data,
    }, message)
