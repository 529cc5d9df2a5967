from geoplot.models import Circle, Color, Icon, LatLng, Map, Marker, Point, Polyline, Size, color_icon

TOKYO_TOWER = LatLng(latitude=35.658584, longitude=139.7454316)


def build_demo_map() -> Map:
    """
    Sample map around Tokyo Tower: an image-icon marker, a closed square
    polyline, a colored pin marker and a circle.
    """
    m = Map()
    google_icon = m.add_icon(Icon(
        url="https://maps.google.com/mapfiles/ms/icons/red-dot.png",
        size=Size(width=32, height=32),
        anchor=Point(x=16, y=32),
    ))
    pin = m.add_icon(color_icon(0, 120, 255))

    m.add_marker(Marker(lat_lng=TOKYO_TOWER, popup="Hello", icon=google_icon))
    m.add_marker(Marker(lat_lng=TOKYO_TOWER.offset(0.05, 0.05), popup="Pin\nnorth-east", icon=pin))
    m.add_polyline(Polyline(
        lat_lngs=[
            TOKYO_TOWER.offset(-0.1, -0.1),
            TOKYO_TOWER.offset(-0.1, 0.1),
            TOKYO_TOWER.offset(0.1, 0.1),
            TOKYO_TOWER.offset(0.1, -0.1),
            TOKYO_TOWER.offset(-0.1, -0.1),
        ],
        popup="World",
        color=Color(r=255, g=0, b=0),
    ))
    m.add_circle(Circle(lat_lng=TOKYO_TOWER, radius_meters=1000, popup="1 km"))
    return m
